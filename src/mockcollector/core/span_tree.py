"""Reconstruction of a causal span tree from a flat list of spans."""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable

from ..exceptions import EmptyTraceError, MissingParentError, MultipleRootSpansError, NoRootSpanError
from ..models import Span, SpanNode, SpanTree

ROOT_PARENT_ID = 0


def build_span_tree(spans: Iterable[Span]) -> SpanTree:
    """Arrange spans into a tree using their ``parent_span_id`` links.

    Exactly one span must have ``parent_span_id == 0`` and every other span
    must point at a span that is reachable from it. Sibling order is not
    guaranteed.
    """
    spans_by_parent: dict[int, list[Span]] = defaultdict(list)
    for span in spans:
        spans_by_parent[span.parent_span_id].append(span)

    if not spans_by_parent:
        raise EmptyTraceError()

    roots = spans_by_parent.pop(ROOT_PARENT_ID, None)
    if roots is None:
        raise NoRootSpanError()
    if len(roots) > 1:
        raise MultipleRootSpansError([span.span_id for span in roots])

    root = SpanNode(span=roots[0])
    pending = deque([root])
    while pending:
        node = pending.popleft()
        for child_span in spans_by_parent.pop(node.span_id, []):
            child = SpanNode(span=child_span)
            node.children.append(child)
            pending.append(child)

    if spans_by_parent:
        raise MissingParentError(sorted(spans_by_parent))

    return SpanTree(trace_id=root.span.hex_trace_id, root=root)
