"""Trace lookup over stored batches."""

from __future__ import annotations

from ..exceptions import TraceNotFoundError
from ..models import SpanTree
from ..storage import BatchStorage
from .span_tree import build_span_tree


def find_trace(store: BatchStorage, trace_id: str) -> SpanTree:
    """Build the span tree for ``trace_id`` from everything stored so far.

    Raises ``TraceNotFoundError`` when no span matches, otherwise any
    ``TreeConsistencyError`` raised while building the tree.
    """
    normalized = trace_id.lower()
    spans = store.spans_for_trace(normalized)
    if not spans:
        raise TraceNotFoundError(normalized)
    return build_span_tree(spans)
