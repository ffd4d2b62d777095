"""Data models for collected traces."""

from .span import Batch, Log, Process, Span, SpanRef, SpanRefType, Tag, TagType, decode_tag_value
from .span_tree import SpanNode, SpanTree
from .tag_value import BinaryValue, BoolValue, DoubleValue, LongValue, StringValue, TagValue

__all__ = [
    "Batch",
    "BinaryValue",
    "BoolValue",
    "DoubleValue",
    "Log",
    "LongValue",
    "Process",
    "Span",
    "SpanNode",
    "SpanRef",
    "SpanRefType",
    "SpanTree",
    "StringValue",
    "Tag",
    "TagType",
    "TagValue",
    "decode_tag_value",
]
