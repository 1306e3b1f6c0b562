"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from grounded_rag.errors import EmbeddingError, GenerationError
from grounded_rag.generation.llm import GenerationClient
from grounded_rag.ingestion.embedder import EmbeddingClient
from grounded_rag.retrieval.base import VectorIndexBase
from grounded_rag.retrieval.models import IndexRecord, RetrievedChunk

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.messages import BaseMessage


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for deterministic testing ─────────────────────────────────────


class FakeEmbeddingClient(EmbeddingClient):
    """Returns ``[len(text), 1.0, 0.0]``; fails for texts containing a marker."""

    model_name = "fake-embedding"

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on is not None and self.fail_on in text:
            raise EmbeddingError("Embedding request to 'fake-embedding' failed: Timeout")
        return [float(len(text)), 1.0, 0.0]


class FakeVectorIndex(VectorIndexBase):
    """In-memory fake that records writes and returns canned matches."""

    def __init__(self, matches: list[str] | None = None) -> None:
        super().__init__("test-collection")
        self.matches = matches or []
        self.upsert_calls: list[list[IndexRecord]] = []
        self.queries: list[tuple[list[float], int]] = []

    def upsert(self, records: Sequence[IndexRecord]) -> int:
        self.upsert_calls.append(list(records))
        return len(records)

    def query(self, vector: list[float], *, k: int = 5) -> list[RetrievedChunk]:
        self.queries.append((vector, k))
        return [RetrievedChunk(chunk_text=text) for text in self.matches[:k]]

    def health_check(self) -> bool:
        return True


class FakeGenerationClient(GenerationClient):
    """Records every request and answers with a fixed string."""

    def __init__(self, answer: str = "Grounded answer.", *, fail: bool = False) -> None:
        self.answer = answer
        self.fail = fail
        self.requests: list[tuple[list[BaseMessage], float]] = []

    def generate(self, messages: list[BaseMessage], *, temperature: float) -> str:
        self.requests.append((messages, temperature))
        if self.fail:
            raise GenerationError("Chat completion failed: APIConnectionError")
        return self.answer


@pytest.fixture()
def fake_embedder() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()


@pytest.fixture()
def fake_index() -> FakeVectorIndex:
    return FakeVectorIndex()


@pytest.fixture()
def fake_generator() -> FakeGenerationClient:
    return FakeGenerationClient()
