"""SpanTree model — a reconstructed trace."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .span import Span


class SpanNode(BaseModel):
    """One span and the child nodes it owns.

    Nodes hold no reference to their parent; use ``SpanTree.parent``.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    span: Span
    children: list[SpanNode] = Field(default_factory=list)

    @property
    def span_id(self) -> int:
        return self.span.span_id

    def descendants(self) -> Iterator[SpanNode]:
        """Yield this node and every node below it, in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class SpanTree(BaseModel):
    """Causal tree for all spans sharing one trace id."""

    model_config = ConfigDict(strict=True, extra="ignore")

    trace_id: str
    root: SpanNode

    _index: dict[int, SpanNode] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context: Any) -> None:
        self._index = {node.span_id: node for node in self.root.descendants()}

    def __len__(self) -> int:
        return sum(1 for _ in self.root.descendants())

    def descendants(self) -> Iterator[SpanNode]:
        return self.root.descendants()

    @property
    def spans(self) -> list[Span]:
        return [node.span for node in self.root.descendants()]

    def get(self, span_id: int) -> SpanNode | None:
        return self._index.get(span_id)

    def parent(self, node: SpanNode) -> SpanNode | None:
        if node.span.is_root:
            return None
        return self._index.get(node.span.parent_span_id)

    def ancestors(self, node: SpanNode) -> list[SpanNode]:
        """Return the chain of parents from ``node`` up to the root."""
        chain: list[SpanNode] = []
        current = self.parent(node)
        while current is not None:
            chain.append(current)
            current = self.parent(current)
        return chain

    def find(self, predicate: Callable[[Span], bool]) -> SpanNode | None:
        for node in self.root.descendants():
            if predicate(node.span):
                return node
        return None

    def find_by_operation(self, operation_name: str) -> SpanNode | None:
        return self.find(lambda span: span.operation_name == operation_name)
