"""Jaeger thrift (binary protocol) encoding of span batches."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import thriftpy2
from thriftpy2.protocol.binary import TBinaryProtocolFactory
from thriftpy2.utils import deserialize, serialize

from ..exceptions import BatchDecodeError
from ..models import Batch, Log, Process, Span, SpanRef, Tag

jaeger_thrift = thriftpy2.load(
    str(Path(__file__).with_name("jaeger.thrift")),
    module_name="jaeger_thrift",
)

_PROTOCOL = TBinaryProtocolFactory()
_I64_SIGN = 1 << 63
_U64_RANGE = 1 << 64


def decode_batch(payload: bytes) -> Batch:
    """Decode one thrift-encoded Batch.

    Raises ``BatchDecodeError`` if the payload is truncated, malformed, or
    lacks a required field. No partial result is ever returned.
    """
    try:
        raw = deserialize(jaeger_thrift.Batch(), payload, _PROTOCOL)
        return _batch_from_thrift(raw)
    except Exception as exc:
        raise BatchDecodeError(f"Failed to decode batch: {exc}") from exc


def encode_batch(batch: Batch) -> bytes:
    return serialize(_batch_to_thrift(batch), _PROTOCOL)


def _batch_from_thrift(raw: Any) -> Batch:
    if raw.process is None or raw.spans is None:
        raise ValueError("batch is missing its process or spans")
    return Batch(
        process=Process(
            service_name=raw.process.serviceName,
            tags=_tags_from_thrift(raw.process.tags),
        ),
        spans=[_span_from_thrift(span) for span in raw.spans],
        seq_no=raw.seqNo,
    )


def _span_from_thrift(raw: Any) -> Span:
    return Span(
        trace_id_low=raw.traceIdLow,
        trace_id_high=raw.traceIdHigh,
        span_id=raw.spanId,
        parent_span_id=raw.parentSpanId,
        operation_name=raw.operationName,
        references=(
            None
            if raw.references is None
            else [
                SpanRef(
                    ref_type=ref.refType,
                    trace_id_low=ref.traceIdLow,
                    trace_id_high=ref.traceIdHigh,
                    span_id=ref.spanId,
                )
                for ref in raw.references
            ]
        ),
        flags=raw.flags,
        start_time=raw.startTime,
        duration=raw.duration,
        tags=_tags_from_thrift(raw.tags),
        logs=(
            None
            if raw.logs is None
            else [
                Log(timestamp=log.timestamp, fields=_tags_from_thrift(log.fields) or [])
                for log in raw.logs
            ]
        ),
    )


def _tags_from_thrift(raw_tags: list[Any] | None) -> list[Tag] | None:
    if raw_tags is None:
        return None
    return [
        Tag(
            key=tag.key,
            v_type=tag.vType,
            v_str=tag.vStr,
            v_double=tag.vDouble,
            v_bool=tag.vBool,
            v_long=tag.vLong,
            v_binary=tag.vBinary.encode("utf-8") if isinstance(tag.vBinary, str) else tag.vBinary,
        )
        for tag in raw_tags
    ]


def _batch_to_thrift(batch: Batch) -> Any:
    return jaeger_thrift.Batch(
        process=jaeger_thrift.Process(
            serviceName=batch.process.service_name,
            tags=_tags_to_thrift(batch.process.tags),
        ),
        spans=[_span_to_thrift(span) for span in batch.spans],
        seqNo=batch.seq_no,
    )


def _span_to_thrift(span: Span) -> Any:
    return jaeger_thrift.Span(
        traceIdLow=_to_i64(span.trace_id_low),
        traceIdHigh=_to_i64(span.trace_id_high),
        spanId=_to_i64(span.span_id),
        parentSpanId=_to_i64(span.parent_span_id),
        operationName=span.operation_name,
        references=(
            None
            if span.references is None
            else [
                jaeger_thrift.SpanRef(
                    refType=ref.ref_type,
                    traceIdLow=_to_i64(ref.trace_id_low),
                    traceIdHigh=_to_i64(ref.trace_id_high),
                    spanId=_to_i64(ref.span_id),
                )
                for ref in span.references
            ]
        ),
        flags=span.flags,
        startTime=span.start_time,
        duration=span.duration,
        tags=_tags_to_thrift(span.tags),
        logs=(
            None
            if span.logs is None
            else [
                jaeger_thrift.Log(timestamp=log.timestamp, fields=_tags_to_thrift(log.fields))
                for log in span.logs
            ]
        ),
    )


def _tags_to_thrift(tags: list[Tag] | None) -> list[Any] | None:
    if tags is None:
        return None
    return [
        jaeger_thrift.Tag(
            key=tag.key,
            vType=tag.v_type,
            vStr=tag.v_str,
            vDouble=tag.v_double,
            vBool=tag.v_bool,
            vLong=tag.v_long,
            vBinary=tag.v_binary,
        )
        for tag in tags
    ]


def _to_i64(value: int) -> int:
    """Map an unsigned 64-bit id onto the signed range used on the wire."""
    if value >= _I64_SIGN:
        return value - _U64_RANGE
    return value
