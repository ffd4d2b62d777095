"""In-memory batch store."""

from __future__ import annotations

import threading

from ..models import Batch, Span


class BatchStore:
    """Append-only, lock-guarded list of received batches.

    The lock is held only to append or to copy the list of batches; all
    filtering happens on the copy.
    """

    def __init__(self) -> None:
        self._batches: list[Batch] = []
        self._lock = threading.Lock()

    def append(self, batch: Batch) -> None:
        with self._lock:
            self._batches.append(batch)

    def snapshot(self) -> list[Batch]:
        with self._lock:
            return list(self._batches)

    def spans_for_trace(self, trace_id: str) -> list[Span]:
        return [
            span
            for batch in self.snapshot()
            for span in batch.spans
            if span.hex_trace_id == trace_id
        ]

    def trace_ids(self) -> list[str]:
        return sorted({span.hex_trace_id for batch in self.snapshot() for span in batch.spans})

    def batch_count(self) -> int:
        with self._lock:
            return len(self._batches)

    def span_count(self) -> int:
        return sum(len(batch.spans) for batch in self.snapshot())
