"""Core trace reconstruction and polling."""

from .collector_config import CollectorConfig
from .query import find_trace
from .retry import retry_until_ok
from .span_tree import build_span_tree

__all__ = [
    "CollectorConfig",
    "build_span_tree",
    "find_trace",
    "retry_until_ok",
]
