"""Collector HTTP server."""

from .app import create_app
from .detached import DetachedCollector

__all__ = ["DetachedCollector", "create_app"]
