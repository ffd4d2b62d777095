"""Rich-based span tree console rendering."""

from __future__ import annotations

from io import StringIO
from typing import Literal

from rich.console import Console
from rich.tree import Tree

from ..exceptions import TagTypeError
from ..models import BinaryValue, Span, SpanNode, SpanRefType, SpanTree, Tag

Verbosity = Literal["minimal", "standard", "full"]
_MAX_VALUE_LEN = 200


def render_span_tree(tree: SpanTree, *, verbosity: Verbosity = "standard") -> str:
    root = Tree(f"Trace: {tree.trace_id} ({len(tree)} spans)")
    _add_node_branch(root, tree.root, verbosity)

    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(root)
    return console.export_text()


def _add_node_branch(parent_tree: Tree, node: SpanNode, verbosity: Verbosity) -> None:
    span = node.span
    branch = parent_tree.add(f"{span.operation_name} ({span.duration_ms:.0f}ms) #{span.span_id}")

    if verbosity in ("standard", "full"):
        for tag in span.tags or []:
            branch.add(f"{tag.key} = {_format_tag(tag)}")

    if verbosity == "full":
        for ref in span.references or []:
            branch.add(f"ref: {_ref_type_label(ref.ref_type)} #{ref.span_id}")
        for log in span.logs or []:
            fields = ", ".join(f"{tag.key}={_format_tag(tag)}" for tag in log.fields)
            branch.add(f"log @{log.timestamp}: {fields}")

    for child in sorted(node.children, key=_start_order):
        _add_node_branch(branch, child, verbosity)


def _start_order(node: SpanNode) -> tuple[int, int]:
    span: Span = node.span
    return (span.start_time, span.span_id)


def _format_tag(tag: Tag) -> str:
    try:
        value = tag.value()
    except TagTypeError as exc:
        return f"<{exc}>"
    if isinstance(value, BinaryValue):
        text = value.value.hex()
    else:
        text = repr(value.value)
    if len(text) <= _MAX_VALUE_LEN:
        return text
    return text[:_MAX_VALUE_LEN] + "... [truncated]"


def _ref_type_label(ref_type: int) -> str:
    try:
        return SpanRefType(ref_type).name.lower()
    except ValueError:
        return f"unknown({ref_type})"
