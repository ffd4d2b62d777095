"""Public exception types for mockcollector."""

from __future__ import annotations


class MockCollectorError(Exception):
    """Base class for all mockcollector exceptions."""


class BatchDecodeError(MockCollectorError):
    """Raised when an ingested payload is not a valid thrift-encoded Batch."""


class TraceNotFoundError(MockCollectorError):
    """Raised when no stored span matches a queried trace id."""

    def __init__(self, trace_id: str) -> None:
        super().__init__(f"No spans found for trace {trace_id}")
        self.trace_id = trace_id


class TreeConsistencyError(MockCollectorError):
    """Raised when a set of spans cannot be arranged into a single tree."""


class EmptyTraceError(TreeConsistencyError):
    def __init__(self) -> None:
        super().__init__("Traces must include at least one span")


class NoRootSpanError(TreeConsistencyError):
    def __init__(self) -> None:
        super().__init__("No root span found")


class MultipleRootSpansError(TreeConsistencyError):
    def __init__(self, span_ids: list[int]) -> None:
        super().__init__(f"Multiple root spans found: {span_ids}")
        self.span_ids = span_ids


class MissingParentError(TreeConsistencyError):
    def __init__(self, parent_span_ids: list[int]) -> None:
        super().__init__(f"Spans found with missing parents: {parent_span_ids}")
        self.parent_span_ids = parent_span_ids


class TagTypeError(MockCollectorError):
    """Raised when a tag's value slots do not match its declared type."""


class UnknownTagTypeError(TagTypeError):
    def __init__(self, type_code: int) -> None:
        super().__init__(f"Unknown tag type: {type_code}")
        self.type_code = type_code


class RetryTimeoutError(MockCollectorError):
    """Raised when ``retry_until_ok`` runs out of time."""


class NeverSucceededError(RetryTimeoutError):
    """Every completed attempt failed. ``last_error`` is the final failure."""

    def __init__(self, last_error: BaseException) -> None:
        super().__init__(f"Timed out waiting for a successful attempt: {last_error}")
        self.last_error = last_error


class NeverCompletedError(RetryTimeoutError):
    def __init__(self) -> None:
        super().__init__("Timed out without ever completing an attempt")


class CollectorRequestError(MockCollectorError):
    """Raised by ``CollectorClient`` when a request to the collector fails."""


class TreeLoadError(MockCollectorError):
    """Raised when a span tree JSON payload cannot be parsed."""
