"""Inspect subcommand implementation."""

from __future__ import annotations

import asyncio
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Literal

from ..client import CollectorClient
from ..exceptions import MockCollectorError
from ..models import SpanTree
from ..renderers import render_span_tree

VerbosityArg = Literal["minimal", "standard", "full"]


def run_inspect(
    trace_id: str,
    url: str,
    verbosity: VerbosityArg,
    *,
    as_json: bool,
    output_path: Path | None,
) -> int:
    if output_path is not None and not as_json:
        raise ValueError("--output is only supported when --json is provided")

    try:
        tree = asyncio.run(CollectorClient(url).fetch_trace(trace_id))
    except MockCollectorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    summary = _build_summary(tree)

    if as_json:
        payload = json.dumps(summary, ensure_ascii=True, sort_keys=True)
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(payload + "\n", encoding="utf-8")
        else:
            print(payload)
        return 0

    operation_counts = Counter(span.operation_name for span in tree.spans)
    root = tree.root.span

    print(f"Trace ID: {tree.trace_id}")
    print(f"Root: {root.operation_name}")
    print(f"Duration: {root.duration_ms:.0f}ms")
    print(f"Spans: {len(tree)}")
    print("Operation counts:")
    for operation, count in sorted(operation_counts.items()):
        print(f"  - {operation}: {count}")
    print()
    print(render_span_tree(tree, verbosity=verbosity))
    return 0


def _build_summary(tree: SpanTree) -> dict[str, object]:
    spans = tree.spans
    operation_counts = Counter(span.operation_name for span in spans)
    depth = max(len(tree.ancestors(node)) for node in tree.descendants())

    return {
        "trace_id": tree.trace_id,
        "root_operation": tree.root.span.operation_name,
        "duration_ms": tree.root.span.duration_ms,
        "span_count": len(spans),
        "max_depth": depth,
        "operation_counts": dict(sorted(operation_counts.items())),
    }
