"""Bounded polling for eventually-visible results."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..exceptions import NeverCompletedError, NeverSucceededError

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def retry_until_ok(
    operation: Callable[[], Awaitable[T]],
    total_timeout: float,
    attempt_timeout: float,
    wait_time: float,
) -> T:
    """Call ``operation`` until it returns without raising.

    Each attempt is limited to ``attempt_timeout`` seconds, or to whatever
    remains of ``total_timeout`` if that is less. Attempts are spaced
    ``wait_time`` seconds apart.

    Raises ``NeverSucceededError`` carrying the last exception if every
    attempt that finished raised, and ``NeverCompletedError`` if none
    finished inside its time limit.
    """
    deadline = time.monotonic() + total_timeout
    last_error: Exception | None = None
    attempt_number = 0

    while True:
        attempt_number += 1
        remaining = max(deadline - time.monotonic(), 0.0)
        attempt_deadline = asyncio.timeout(min(remaining, attempt_timeout))
        try:
            async with attempt_deadline:
                return await operation()
        except Exception as exc:
            if attempt_deadline.expired():
                logger.debug("Attempt %d timed out", attempt_number)
            else:
                logger.debug("Attempt %d failed: %s", attempt_number, exc)
                last_error = exc

        remaining = deadline - time.monotonic()
        if remaining < wait_time:
            if last_error is not None:
                raise NeverSucceededError(last_error) from last_error
            raise NeverCompletedError()

        await asyncio.sleep(wait_time)
