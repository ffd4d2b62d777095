"""Serve subcommand implementation."""

from __future__ import annotations

import logging

import uvicorn

from ..core.collector_config import CollectorConfig, LogLevel
from ..server import create_app
from ..storage import BatchStore


def run_serve(*, host: str, port: int, log_level: LogLevel) -> int:
    config = CollectorConfig(host=host, port=port, log_level=log_level)
    logging.basicConfig(
        level=logging.DEBUG if config.log_level == "trace" else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(BatchStore()),
        host=config.host,
        port=config.port,
        log_level=config.log_level,
        log_config=None,
    )
    return 0
