"""mockcollector — in-process Jaeger collector for asserting on traces in tests.

Typical use:
    collector = DetachedCollector.start()
    await collector.wait_until_ready()
    # point the application's Jaeger exporter at collector.base_url
    tree = await collector.check_trace(trace_id, lambda tree: ...)
"""

from __future__ import annotations

from .client import CollectorClient
from .core import CollectorConfig, build_span_tree, find_trace, retry_until_ok
from .exceptions import (
    BatchDecodeError,
    MockCollectorError,
    NeverCompletedError,
    NeverSucceededError,
    RetryTimeoutError,
    TagTypeError,
    TraceNotFoundError,
    TreeConsistencyError,
)
from .models import (
    Batch,
    Process,
    Span,
    SpanNode,
    SpanTree,
    Tag,
    TagType,
    TagValue,
    decode_tag_value,
)
from .server import DetachedCollector, create_app
from .storage import BatchStorage, BatchStore

__all__ = [
    "Batch",
    "BatchDecodeError",
    "BatchStorage",
    "BatchStore",
    "CollectorClient",
    "CollectorConfig",
    "DetachedCollector",
    "MockCollectorError",
    "NeverCompletedError",
    "NeverSucceededError",
    "Process",
    "RetryTimeoutError",
    "Span",
    "SpanNode",
    "SpanTree",
    "Tag",
    "TagType",
    "TagTypeError",
    "TagValue",
    "TraceNotFoundError",
    "TreeConsistencyError",
    "build_span_tree",
    "create_app",
    "decode_tag_value",
    "find_trace",
    "retry_until_ok",
]
