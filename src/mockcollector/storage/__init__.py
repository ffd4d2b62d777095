"""Storage backends."""

from .base import BatchStorage
from .memory import BatchStore

__all__ = ["BatchStorage", "BatchStore"]
