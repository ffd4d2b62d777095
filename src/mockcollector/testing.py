"""Assertion helpers for tests that inspect collected traces."""

from __future__ import annotations

from .exceptions import TagTypeError
from .models import Span, SpanNode, SpanTree, TagValue


def check_tag(span: Span | SpanNode, key: str, expected: TagValue) -> None:
    """Assert that ``span`` carries tag ``key`` with exactly ``expected``."""
    if isinstance(span, SpanNode):
        span = span.span
    tag = span.get_tag(key)
    if tag is None:
        raise AssertionError(f"No tag with key {key} was found on {span.operation_name}")
    try:
        value = tag.value()
    except TagTypeError as exc:
        raise AssertionError(f"Could not interpret tag {key}: {exc}") from exc
    if value != expected:
        raise AssertionError(
            f"Tag with key {key} was found, but its value was {value!r}, not {expected!r}"
        )


def require_span(tree: SpanTree, operation_name: str) -> SpanNode:
    """Return the first node named ``operation_name`` or fail the assertion."""
    node = tree.find_by_operation(operation_name)
    if node is None:
        raise AssertionError(f"No span found for {operation_name}")
    return node
