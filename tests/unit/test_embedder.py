"""Unit tests for the embedding client adapter."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding

from grounded_rag.config import Settings
from grounded_rag.errors import EmbeddingError, UpstreamError
from grounded_rag.ingestion.embedder import LangChainEmbeddingClient, get_embedding_client


def _client(embeddings, dimension: int | None = None) -> LangChainEmbeddingClient:
    return LangChainEmbeddingClient(embeddings, model_name="test-model", dimension=dimension)


class TestLangChainEmbeddingClient:
    def test_embed_returns_fixed_length_vector(self) -> None:
        client = _client(DeterministicFakeEmbedding(size=8), dimension=8)
        vector = client.embed("What is the return policy?")
        assert len(vector) == 8
        assert all(isinstance(v, float) for v in vector)

    def test_embed_is_deterministic_for_same_text(self) -> None:
        client = _client(DeterministicFakeEmbedding(size=8))
        assert client.embed("same text") == client.embed("same text")

    def test_upstream_failure_raises_embedding_error(self) -> None:
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = RuntimeError("secret-key rejected")
        with pytest.raises(EmbeddingError) as excinfo:
            _client(embeddings).embed("hello")
        assert excinfo.value.stage == "embed"
        assert isinstance(excinfo.value, UpstreamError)
        assert "secret-key" not in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_empty_vector_raises(self) -> None:
        embeddings = MagicMock()
        embeddings.embed_query.return_value = []
        with pytest.raises(EmbeddingError, match="no vector"):
            _client(embeddings).embed("hello")

    def test_dimension_mismatch_raises(self) -> None:
        client = _client(DeterministicFakeEmbedding(size=4), dimension=1536)
        with pytest.raises(EmbeddingError, match="expected 1536"):
            client.embed("hello")

    def test_one_call_per_text_without_caching(self) -> None:
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]
        client = _client(embeddings)
        client.embed("repeat")
        client.embed("repeat")
        assert embeddings.embed_query.call_count == 2


class TestEmbedMany:
    def test_yields_in_order(self) -> None:
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = lambda text: [float(len(text))]
        client = _client(embeddings)
        assert list(client.embed_many(["a", "bbb", "cc"])) == [[1.0], [3.0], [2.0]]

    def test_earlier_vectors_survive_a_later_failure(self) -> None:
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = [[1.0], RuntimeError("boom"), [3.0]]
        client = _client(embeddings)

        collected: list[list[float]] = []
        with pytest.raises(EmbeddingError):
            for vector in client.embed_many(["one", "two", "three"]):
                collected.append(vector)

        assert collected == [[1.0]]
        assert embeddings.embed_query.call_count == 2


class TestGetEmbeddingClient:
    def test_openai_provider(self) -> None:
        settings = Settings(openai_api_key="sk-test", embedding_model="text-embedding-ada-002", embedding_dimension=1536)
        client = get_embedding_client(settings)
        assert client.model_name == "text-embedding-ada-002"
        assert client.dimension == 1536

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported embedding_provider"):
            get_embedding_client(Settings(embedding_provider="nope"))
