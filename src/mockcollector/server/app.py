"""FastAPI application for the collector endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, Response, status

from ..core.query import find_trace
from ..exceptions import BatchDecodeError, TraceNotFoundError, TreeConsistencyError
from ..serializers.json import tree_to_json
from ..serializers.thrift import decode_batch
from ..storage import BatchStorage

logger = logging.getLogger(__name__)


def create_app(store: BatchStorage) -> FastAPI:
    """Build the collector app around an injected store."""
    app = FastAPI(title="mockcollector", docs_url=None, redoc_url=None)

    @app.get("/up")
    async def up() -> Response:
        return Response(status_code=status.HTTP_200_OK)

    @app.post("/api/traces")
    async def ingest_batch(request: Request) -> Response:
        payload = await request.body()
        try:
            batch = decode_batch(payload)
        except BatchDecodeError as exc:
            logger.warning("Rejected %d byte batch: %s", len(payload), exc)
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        try:
            store.append(batch)
        except Exception:
            logger.exception("Failed to store batch from %s", batch.process.service_name)
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.debug(
            "Stored batch of %d spans from %s", len(batch.spans), batch.process.service_name
        )
        return Response(status_code=status.HTTP_200_OK)

    @app.get("/api/traces/{trace_id}")
    async def get_trace(trace_id: str) -> Response:
        try:
            tree = find_trace(store, trace_id)
        except TraceNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        except TreeConsistencyError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return Response(content=tree_to_json(tree, indent=None), media_type="application/json")

    return app
