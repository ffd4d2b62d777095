from __future__ import annotations

import pytest

from mockcollector.core import build_span_tree
from mockcollector.exceptions import (
    EmptyTraceError,
    MissingParentError,
    MultipleRootSpansError,
    NoRootSpanError,
    TreeConsistencyError,
)
from mockcollector.models import Span, SpanTree


def _span(span_id: int, parent_span_id: int = 0, name: str | None = None) -> Span:
    return Span(
        trace_id_high=0x1,
        trace_id_low=0x2,
        span_id=span_id,
        parent_span_id=parent_span_id,
        operation_name=name or f"op-{span_id}",
    )


def _edges(tree: SpanTree) -> set[tuple[int, int]]:
    return {
        (node.span_id, child.span_id) for node in tree.descendants() for child in node.children
    }


def test_single_root_span_builds_one_node_tree() -> None:
    tree = build_span_tree([_span(10)])

    assert len(tree) == 1
    assert tree.root.span_id == 10
    assert tree.root.children == []
    assert tree.trace_id == "00000000000000010000000000000002"


def test_tree_reproduces_every_parent_child_edge() -> None:
    spans = [
        _span(4, parent_span_id=2),
        _span(2, parent_span_id=1),
        _span(1),
        _span(3, parent_span_id=1),
        _span(5, parent_span_id=2),
        _span(6, parent_span_id=5),
    ]

    tree = build_span_tree(spans)

    assert len(tree) == len(spans)
    assert tree.root.span_id == 1
    assert _edges(tree) == {(s.parent_span_id, s.span_id) for s in spans if s.parent_span_id}


def test_siblings_are_all_attached_regardless_of_order() -> None:
    tree = build_span_tree([_span(1), _span(3, 1), _span(2, 1), _span(4, 1)])

    assert {child.span_id for child in tree.root.children} == {2, 3, 4}


def test_empty_input_is_rejected_first() -> None:
    with pytest.raises(EmptyTraceError, match="at least one span"):
        build_span_tree([])


def test_missing_root_is_rejected() -> None:
    with pytest.raises(NoRootSpanError, match="No root span found"):
        build_span_tree([_span(2, parent_span_id=1), _span(3, parent_span_id=2)])


def test_multiple_roots_are_rejected() -> None:
    with pytest.raises(MultipleRootSpansError, match="Multiple root spans found") as exc_info:
        build_span_tree([_span(1), _span(2), _span(3, parent_span_id=1)])

    assert sorted(exc_info.value.span_ids) == [1, 2]


def test_orphaned_spans_are_rejected() -> None:
    with pytest.raises(MissingParentError, match="missing parents") as exc_info:
        build_span_tree([_span(1), _span(2, parent_span_id=1), _span(3, parent_span_id=99)])

    assert exc_info.value.parent_span_ids == [99]


def test_disconnected_cycle_is_reported_as_orphans() -> None:
    with pytest.raises(MissingParentError):
        build_span_tree([_span(1), _span(2, parent_span_id=3), _span(3, parent_span_id=2)])


def test_consistency_errors_share_a_base_class() -> None:
    for spans in ([], [_span(2, 1)], [_span(1), _span(2)]):
        with pytest.raises(TreeConsistencyError):
            build_span_tree(spans)


def test_parent_lookup_goes_through_the_index() -> None:
    tree = build_span_tree([_span(1), _span(2, 1), _span(3, 2)])
    leaf = tree.get(3)

    assert leaf is not None
    parent = tree.parent(leaf)
    assert parent is not None
    assert parent.span_id == 2
    assert [node.span_id for node in tree.ancestors(leaf)] == [2, 1]
    assert tree.parent(tree.root) is None
    assert tree.get(404) is None


def test_descendants_are_pre_order() -> None:
    tree = build_span_tree([_span(1), _span(2, 1), _span(3, 2), _span(4, 1)])

    order = [node.span_id for node in tree.descendants()]

    assert order[0] == 1
    assert order.index(3) == order.index(2) + 1
    assert sorted(order) == [1, 2, 3, 4]


def test_find_by_operation() -> None:
    tree = build_span_tree([_span(1, name="POST /items"), _span(2, 1, name="GET /stock/abc")])

    node = tree.find_by_operation("GET /stock/abc")

    assert node is not None
    assert node.span_id == 2
    assert tree.find_by_operation("missing") is None
    assert [span.span_id for span in tree.spans] == [1, 2]
