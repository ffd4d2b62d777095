"""HTTP client for a running collector."""

from __future__ import annotations

import httpx

from .exceptions import CollectorRequestError, TraceNotFoundError, TreeConsistencyError
from .models import Batch, SpanTree
from .serializers.json import tree_from_json
from .serializers.thrift import encode_batch

THRIFT_CONTENT_TYPE = "application/vnd.apache.thrift.binary"


class CollectorClient:
    """Talks to the collector endpoints over HTTP.

    Transport failures and unexpected status codes raise
    ``CollectorRequestError``.
    """

    def __init__(self, base_url: str, *, timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def ping(self) -> None:
        await self._request("GET", "/up")

    async def submit_batch(self, batch: Batch) -> None:
        await self._request(
            "POST",
            "/api/traces",
            content=encode_batch(batch),
            headers={"Content-Type": THRIFT_CONTENT_TYPE},
        )

    async def fetch_trace(self, trace_id: str) -> SpanTree:
        """Fetch a reconstructed trace.

        Raises ``TraceNotFoundError`` for unknown ids and
        ``TreeConsistencyError`` when the collector cannot build the tree.
        """
        response = await self._request("GET", f"/api/traces/{trace_id}", check_status=False)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise TraceNotFoundError(trace_id)
        if response.status_code == httpx.codes.CONFLICT:
            raise TreeConsistencyError(_detail(response))
        _raise_for_status(response)
        return tree_from_json(response.content)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        check_status: bool = True,
        **kwargs: object,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise CollectorRequestError(f"{method} {url} failed: {exc}") from exc
        if check_status:
            _raise_for_status(response)
        return response


def _raise_for_status(response: httpx.Response) -> None:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise CollectorRequestError(
            f"{response.request.method} {response.request.url} returned {response.status_code}"
        ) from exc


def _detail(response: httpx.Response) -> str:
    try:
        return str(response.json()["detail"])
    except (ValueError, KeyError, TypeError):
        return response.text
