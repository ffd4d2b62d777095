"""A collector server that runs on its own thread for the life of the process."""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable

import uvicorn

from ..client import CollectorClient
from ..core.collector_config import CollectorConfig
from ..core.query import find_trace
from ..core.retry import retry_until_ok
from ..exceptions import MockCollectorError
from ..models import SpanTree
from ..storage import BatchStore
from .app import create_app

logger = logging.getLogger(__name__)

_WILDCARD_HOSTS = {"", "0.0.0.0"}


class DetachedCollector:
    """Handle to a collector running on a detached daemon thread.

    The handle only carries the address and the store; it does not own the
    server thread, which keeps serving until the process exits. Start one
    per process and share it, querying only for the trace ids you produce.
    """

    def __init__(self, base_url: str, store: BatchStore, config: CollectorConfig) -> None:
        self._base_url = base_url
        self.store = store
        self.config = config

    @classmethod
    def start(
        cls,
        config: CollectorConfig | None = None,
        store: BatchStore | None = None,
    ) -> DetachedCollector:
        """Bind a listening socket and start serving on a background thread.

        Returns as soon as the thread is started; use ``wait_until_ready``
        before sending traffic.
        """
        config = config or CollectorConfig()
        store = store if store is not None else BatchStore()

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((config.host, config.port))
        except OSError as exc:
            sock.close()
            raise MockCollectorError(f"Failed to bind to {config.host}:{config.port}") from exc
        port = sock.getsockname()[1]

        server = uvicorn.Server(
            uvicorn.Config(
                create_app(store),
                log_level=config.log_level,
                log_config=None,
                lifespan="off",
            )
        )
        thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [sock]},
            name=f"mockcollector-{port}",
            daemon=True,
        )
        thread.start()

        host = "127.0.0.1" if config.host in _WILDCARD_HOSTS else config.host
        base_url = f"http://{host}:{port}"
        logger.info("Collector listening on %s", base_url)
        return cls(base_url=base_url, store=store, config=config)

    @property
    def base_url(self) -> str:
        return self._base_url

    def client(self) -> CollectorClient:
        return CollectorClient(self._base_url)

    async def ping(self) -> None:
        await self.client().ping()

    async def wait_until_ready(self) -> None:
        await retry_until_ok(
            self.ping,
            self.config.startup_timeout,
            self.config.startup_attempt_timeout,
            self.config.startup_poll_interval,
        )

    def get_trace(self, trace_id: str) -> SpanTree:
        return find_trace(self.store, trace_id)

    async def check_trace(
        self,
        trace_id: str,
        check: Callable[[SpanTree], None],
        *,
        timeout: float = 5.0,
        wait_time: float = 0.1,
    ) -> SpanTree:
        """Poll until the trace exists and ``check`` accepts it.

        ``check`` signals rejection by raising (usually ``AssertionError``).
        On timeout the last rejection is available as
        ``NeverSucceededError.last_error``.
        """

        async def attempt() -> SpanTree:
            tree = self.get_trace(trace_id)
            check(tree)
            return tree

        return await retry_until_ok(attempt, timeout, timeout, wait_time)
