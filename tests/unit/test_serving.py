"""Unit tests for the serving layer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from grounded_rag.errors import IndexWriteError
from grounded_rag.ingestion.loader import SourceDocument
from grounded_rag.ingestion.pipeline import IngestionPipeline
from grounded_rag.query.pipeline import QueryPipeline
from grounded_rag.serving.app import (
    NO_CONTENT_MESSAGE,
    app,
    get_document_source,
    get_ingestion_pipeline,
    get_query_pipeline,
)


@pytest.fixture()
def client(fake_embedder, fake_index, fake_generator):
    app.dependency_overrides[get_query_pipeline] = lambda: QueryPipeline(
        fake_embedder, fake_index, fake_generator
    )
    app.dependency_overrides[get_ingestion_pipeline] = lambda: IngestionPipeline(
        fake_embedder, fake_index, chunk_size=1000
    )
    app.dependency_overrides[get_document_source] = lambda: [
        SourceDocument("faq.pdf", ["Returns accepted within 30 days.", "Shipping is free."])
    ]
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_endpoint(client: TestClient) -> None:
    """GET /health should return 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_query_returns_answer(client: TestClient, fake_index) -> None:
    fake_index.matches = ["Returns accepted within 30 days."]
    response = client.post("/query", json={"question": "What is the return policy?"})
    assert response.status_code == 200
    assert response.json() == {"answer": "Grounded answer."}


def test_query_without_matches_returns_404(client: TestClient, fake_generator) -> None:
    response = client.post("/query", json={"question": "Unrelated?"})
    assert response.status_code == 404
    assert response.json() == {"detail": NO_CONTENT_MESSAGE}
    assert fake_generator.requests == []


def test_query_upstream_failure_returns_500(client: TestClient, fake_embedder) -> None:
    fake_embedder.fail_on = "boom"
    response = client.post("/query", json={"question": "boom?"})
    assert response.status_code == 500
    body = response.json()
    assert body["stage"] == "embed"
    assert "failed" in body["error"]


def test_query_rejects_empty_question(client: TestClient) -> None:
    response = client.post("/query", json={"question": ""})
    assert response.status_code == 422


def test_ingest_reports_documents_indexed(client: TestClient, fake_index) -> None:
    response = client.post("/ingest")
    assert response.status_code == 200
    assert response.json() == {
        "message": "Data preparation complete",
        "documentsIndexed": 2,
        "pagesFailed": 0,
    }
    assert len(fake_index.upsert_calls) == 1


def test_ingest_write_failure_returns_500(client: TestClient) -> None:
    pipeline = MagicMock()
    pipeline.run.side_effect = IndexWriteError("Writing to collection 'docs' failed")
    app.dependency_overrides[get_ingestion_pipeline] = lambda: pipeline

    response = client.post("/ingest")

    assert response.status_code == 500
    assert response.json()["stage"] == "index_write"
