"""Configuration for a collector instance."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


class CollectorConfig(BaseModel):
    """Validated configuration for a collector. Passed via DI at construction."""

    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0, le=65535)
    log_level: LogLevel = "warning"
    startup_timeout: float = 10.0
    startup_attempt_timeout: float = 1.0
    startup_poll_interval: float = 0.05
