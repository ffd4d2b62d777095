from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from mockcollector.models import Batch, Process, Span, Tag, TagType
from mockcollector.serializers import encode_batch, tree_from_json
from mockcollector.server import create_app
from mockcollector.storage import BatchStore

TRACE_ID = "00000000000000010000000000000002"


def _batch(*spans: Span) -> Batch:
    return Batch(process=Process(service_name="cart_server"), spans=list(spans))


def _span(span_id: int, parent_span_id: int = 0) -> Span:
    return Span(
        trace_id_high=0x1,
        trace_id_low=0x2,
        span_id=span_id,
        parent_span_id=parent_span_id,
        operation_name=f"op-{span_id}",
        tags=[Tag(key="http.status_code", v_type=TagType.LONG, v_long=200)],
    )


@pytest.fixture
def store() -> BatchStore:
    return BatchStore()


@pytest.fixture
def client(store: BatchStore) -> TestClient:
    return TestClient(create_app(store))


def test_up_reports_ready(client: TestClient) -> None:
    response = client.get("/up")

    assert response.status_code == 200


def test_valid_batch_is_acknowledged_and_stored(client: TestClient, store: BatchStore) -> None:
    response = client.post(
        "/api/traces",
        content=encode_batch(_batch(_span(10), _span(11, 10))),
        headers={"Content-Type": "application/vnd.apache.thrift.binary"},
    )

    assert response.status_code == 200
    assert store.batch_count() == 1
    assert [span.span_id for span in store.spans_for_trace(TRACE_ID)] == [10, 11]


def test_malformed_batch_is_rejected_without_storing(
    client: TestClient,
    store: BatchStore,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="mockcollector.server.app"):
        response = client.post("/api/traces", content=b"\x0c\x00\x01garbage")

    assert response.status_code == 500
    assert response.content == b""
    assert store.batch_count() == 0
    assert any("Rejected" in record.message for record in caplog.records)


@pytest.mark.parametrize("keep", [1, 25, -40, -5, -1])
def test_partially_valid_batch_is_not_stored(
    client: TestClient, store: BatchStore, keep: int
) -> None:
    encoded = encode_batch(_batch(_span(10), _span(11, 10)))

    response = client.post("/api/traces", content=encoded[:keep])

    assert response.status_code == 500
    assert store.batch_count() == 0


def test_store_failure_is_reported_as_server_error() -> None:
    class _FailingStore(BatchStore):
        def append(self, batch: Batch) -> None:
            raise RuntimeError("store unavailable")

    client = TestClient(create_app(_FailingStore()))

    response = client.post("/api/traces", content=encode_batch(_batch(_span(10))))

    assert response.status_code == 500
    assert response.content == b""


def test_trace_query_returns_tree_json(client: TestClient, store: BatchStore) -> None:
    store.append(_batch(_span(10), _span(11, 10)))

    response = client.get(f"/api/traces/{TRACE_ID}")

    assert response.status_code == 200
    tree = tree_from_json(response.content)
    assert tree.root.span_id == 10
    assert [child.span_id for child in tree.root.children] == [11]


def test_trace_query_for_unknown_trace_is_404(client: TestClient) -> None:
    response = client.get("/api/traces/ffffffffffffffffffffffffffffffff")

    assert response.status_code == 404
    assert "No spans found" in response.json()["detail"]


def test_trace_query_for_inconsistent_trace_is_409(client: TestClient, store: BatchStore) -> None:
    store.append(_batch(_span(10), _span(11)))

    response = client.get(f"/api/traces/{TRACE_ID}")

    assert response.status_code == 409
    assert "Multiple root spans" in response.json()["detail"]
