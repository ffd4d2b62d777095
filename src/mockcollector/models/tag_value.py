"""Decoded tag values."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StringValue(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    value: str


class DoubleValue(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    value: float


class BoolValue(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    value: bool


class LongValue(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    value: int


class BinaryValue(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    value: bytes


TagValue = StringValue | DoubleValue | BoolValue | LongValue | BinaryValue
