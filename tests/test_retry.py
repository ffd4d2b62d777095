from __future__ import annotations

import asyncio
import time

import pytest

from mockcollector.core import retry_until_ok
from mockcollector.exceptions import NeverCompletedError, NeverSucceededError, RetryTimeoutError


@pytest.mark.asyncio
async def test_returns_first_success_after_failures() -> None:
    calls = 0

    async def flaky() -> str:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise ConnectionError(f"attempt {calls} refused")
        return "ready"

    result = await retry_until_ok(flaky, total_timeout=2.0, attempt_timeout=0.5, wait_time=0.01)

    assert result == "ready"
    assert calls == 3


@pytest.mark.asyncio
async def test_immediate_success_makes_a_single_call() -> None:
    calls = 0

    async def ok() -> int:
        nonlocal calls
        calls += 1
        return 42

    assert await retry_until_ok(ok, total_timeout=1.0, attempt_timeout=1.0, wait_time=0.5) == 42
    assert calls == 1


@pytest.mark.asyncio
async def test_operation_that_never_finishes_reports_never_completed() -> None:
    async def hangs() -> None:
        await asyncio.sleep(10)

    started = time.monotonic()
    with pytest.raises(NeverCompletedError):
        await retry_until_ok(hangs, total_timeout=0.3, attempt_timeout=0.05, wait_time=0.05)

    assert time.monotonic() - started < 2.0


@pytest.mark.asyncio
async def test_operation_that_always_fails_reports_last_error() -> None:
    errors: list[ValueError] = []

    async def fails() -> None:
        error = ValueError(f"attempt {len(errors) + 1}")
        errors.append(error)
        raise error

    with pytest.raises(NeverSucceededError) as exc_info:
        await retry_until_ok(fails, total_timeout=0.2, attempt_timeout=0.1, wait_time=0.02)

    assert len(errors) > 1
    assert exc_info.value.last_error is errors[-1]
    assert exc_info.value.__cause__ is errors[-1]
    assert isinstance(exc_info.value, RetryTimeoutError)


@pytest.mark.asyncio
async def test_timed_out_attempts_do_not_erase_an_earlier_error() -> None:
    calls = 0

    async def fails_then_hangs() -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise LookupError("trace not visible yet")
        await asyncio.sleep(10)

    with pytest.raises(NeverSucceededError) as exc_info:
        await retry_until_ok(
            fails_then_hangs, total_timeout=0.3, attempt_timeout=0.05, wait_time=0.02
        )

    assert isinstance(exc_info.value.last_error, LookupError)
    assert calls > 1


@pytest.mark.asyncio
async def test_attempt_is_bounded_by_remaining_total_time() -> None:
    async def hangs() -> None:
        await asyncio.sleep(10)

    started = time.monotonic()
    with pytest.raises(NeverCompletedError):
        await retry_until_ok(hangs, total_timeout=0.1, attempt_timeout=5.0, wait_time=0.05)

    assert time.monotonic() - started < 1.0


@pytest.mark.asyncio
async def test_concurrent_retry_loops_do_not_block_each_other() -> None:
    async def ready_after(delay: float) -> float:
        started = time.monotonic()

        async def probe() -> float:
            if time.monotonic() - started < delay:
                raise RuntimeError("not yet")
            return delay

        return await retry_until_ok(probe, total_timeout=2.0, attempt_timeout=0.5, wait_time=0.01)

    results = await asyncio.gather(ready_after(0.05), ready_after(0.1), ready_after(0.15))

    assert results == [0.05, 0.1, 0.15]
