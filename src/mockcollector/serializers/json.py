"""JSON serialization helpers for span trees."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import TreeLoadError
from ..models import SpanTree


def tree_to_json(tree: SpanTree, *, indent: int | None = 2) -> str:
    return tree.model_dump_json(indent=indent)


def tree_from_json(payload: str | bytes) -> SpanTree:
    """Parse a JSON document into a SpanTree.

    Raises ``TreeLoadError`` on invalid or unparseable input.
    """
    try:
        return SpanTree.model_validate_json(payload)
    except ValueError as exc:
        raise TreeLoadError(f"Failed to parse span tree JSON: {exc}") from exc


def save_tree_json(tree: SpanTree, path: str | Path, *, indent: int | None = 2) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(tree_to_json(tree, indent=indent), encoding="utf-8")
    return output_path
