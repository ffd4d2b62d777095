"""Jaeger span, tag, and batch models."""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..exceptions import TagTypeError, UnknownTagTypeError
from .tag_value import (
    BinaryValue,
    BoolValue,
    DoubleValue,
    LongValue,
    StringValue,
    TagValue,
)

T = TypeVar("T")

_U64_MASK = 0xFFFFFFFFFFFFFFFF


def _enum_code(value: object) -> object:
    if isinstance(value, IntEnum):
        return int(value)
    return value


class TagType(IntEnum):
    STRING = 0
    DOUBLE = 1
    BOOL = 2
    LONG = 3
    BINARY = 4


class SpanRefType(IntEnum):
    CHILD_OF = 0
    FOLLOWS_FROM = 1


class Tag(BaseModel):
    """Typed key/value annotation.

    ``v_type`` is kept as the raw wire code so that unrecognized codes
    survive ingestion and are reported by ``value()``.
    """

    model_config = ConfigDict(
        strict=True,
        extra="ignore",
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    key: str
    v_type: int
    v_str: str | None = None
    v_double: float | None = None
    v_bool: bool | None = None
    v_long: int | None = None
    v_binary: bytes | None = None

    @field_validator("v_type", mode="before")
    @classmethod
    def coerce_type_code(cls, value: object) -> object:
        return _enum_code(value)

    def value(self) -> TagValue:
        return decode_tag_value(self)


def decode_tag_value(tag: Tag) -> TagValue:
    """Collapse a tag's optional value slots into a single typed value.

    Raises ``TagTypeError`` when the slot for the declared type is empty and
    ``UnknownTagTypeError`` when the declared type code is not recognized.
    """
    try:
        tag_type = TagType(tag.v_type)
    except ValueError:
        raise UnknownTagTypeError(tag.v_type) from None

    if tag_type == TagType.STRING:
        return StringValue(value=_require(tag.v_str, tag_type))
    if tag_type == TagType.DOUBLE:
        return DoubleValue(value=_require(tag.v_double, tag_type))
    if tag_type == TagType.BOOL:
        return BoolValue(value=_require(tag.v_bool, tag_type))
    if tag_type == TagType.LONG:
        return LongValue(value=_require(tag.v_long, tag_type))
    return BinaryValue(value=_require(tag.v_binary, tag_type))


def _require(value: T | None, tag_type: TagType) -> T:
    if value is None:
        raise TagTypeError(f"Tag type was {tag_type.name.lower()} but no value was found")
    return value


class Log(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    timestamp: int
    fields: list[Tag] = Field(default_factory=list)


class SpanRef(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    ref_type: int
    trace_id_low: int
    trace_id_high: int
    span_id: int

    @field_validator("ref_type", mode="before")
    @classmethod
    def coerce_ref_type(cls, value: object) -> object:
        return _enum_code(value)


class Span(BaseModel):
    """A single completed operation, as reported on the wire."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    trace_id_low: int
    trace_id_high: int
    span_id: int
    parent_span_id: int = 0
    operation_name: str
    references: list[SpanRef] | None = None
    flags: int = 0
    start_time: int = 0
    duration: int = 0
    tags: list[Tag] | None = None
    logs: list[Log] | None = None

    @computed_field(return_type=str)
    @property
    def hex_trace_id(self) -> str:
        return f"{self.trace_id_high & _U64_MASK:016x}{self.trace_id_low & _U64_MASK:016x}"

    @computed_field(return_type=float)
    @property
    def duration_ms(self) -> float:
        return self.duration / 1000.0

    @property
    def is_root(self) -> bool:
        return self.parent_span_id == 0

    def get_tag(self, key: str) -> Tag | None:
        for tag in self.tags or []:
            if tag.key == key:
                return tag
        return None


class Process(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    service_name: str
    tags: list[Tag] | None = None


class Batch(BaseModel):
    """Spans submitted together by one reporting process."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    process: Process
    spans: list[Span] = Field(default_factory=list)
    seq_no: int | None = None
