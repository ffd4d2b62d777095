from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from mockcollector import CollectorConfig, DetachedCollector


@pytest.fixture(scope="session")
def collector() -> DetachedCollector:
    """One live collector shared by the whole session.

    Tests share its store, so each test must use its own trace ids.
    """
    started = DetachedCollector.start(CollectorConfig())
    # asyncio.run must not touch the event loop of the test thread.
    with ThreadPoolExecutor(max_workers=1) as pool:
        pool.submit(asyncio.run, started.wait_until_ready()).result()
    return started
