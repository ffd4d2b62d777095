"""Storage backend abstractions."""

from __future__ import annotations

from typing import Protocol

from ..models import Batch, Span


class BatchStorage(Protocol):
    """Protocol for holding ingested batches."""

    def append(self, batch: Batch) -> None: ...
    def spans_for_trace(self, trace_id: str) -> list[Span]: ...
    def trace_ids(self) -> list[str]: ...
