"""Embedding client — text in, fixed-length vector out.

Both pipelines embed through :class:`EmbeddingClient`: ingestion for
every chunk, the query pipeline for the question.  Every call goes to
the upstream service; nothing is cached.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from grounded_rag.errors import EmbeddingError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from langchain_core.embeddings import Embeddings

    from grounded_rag.config import Settings

logger = logging.getLogger(__name__)


class EmbeddingClient(ABC):
    """Provider-agnostic embedding interface."""

    model_name: str = "unknown"

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding of *text*.

        Raises
        ------
        EmbeddingError
            When the upstream call fails or yields no vector.
        """
        ...

    def embed_many(self, texts: Iterable[str]) -> Iterator[list[float]]:
        """Embed *texts* one request at a time, yielding vectors in order.

        The generator is lazy: a failure on one text raises from the
        ``next()`` call for that text, after all earlier vectors have
        been handed to the caller.
        """
        for text in texts:
            yield self.embed(text)


class LangChainEmbeddingClient(EmbeddingClient):
    """Adapter over any LangChain :class:`~langchain_core.embeddings.Embeddings`.

    Parameters
    ----------
    embeddings:
        The LangChain embedding model (``OpenAIEmbeddings``,
        ``HuggingFaceEmbeddings`` …).
    model_name:
        Identifier used in log and error messages.
    dimension:
        Expected vector length.  When set, a vector of any other length
        raises :class:`EmbeddingError`.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        *,
        model_name: str,
        dimension: int | None = None,
    ) -> None:
        self._embeddings = embeddings
        self.model_name = model_name
        self.dimension = dimension

    def embed(self, text: str) -> list[float]:
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(
                f"Embedding request to {self.model_name!r} failed: {type(exc).__name__}"
            ) from exc

        if not vector:
            raise EmbeddingError(f"Embedding model {self.model_name!r} returned no vector")
        if self.dimension is not None and len(vector) != self.dimension:
            raise EmbeddingError(
                f"Embedding model {self.model_name!r} returned {len(vector)} dimensions, "
                f"expected {self.dimension}"
            )
        return [float(v) for v in vector]


def get_embedding_client(settings: Settings) -> LangChainEmbeddingClient:
    """Return the embedding client selected by ``settings.embedding_provider``.

    * ``"openai"`` — ``OpenAIEmbeddings`` against OpenAI cloud or any
      OpenAI-compatible ``embedding_base_url``.
    * ``"huggingface"`` — a local sentence-transformer via
      ``HuggingFaceEmbeddings``.
    """
    provider = settings.embedding_provider.lower()
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {"model": settings.embedding_model}
        if settings.embedding_base_url:
            logger.info("Using embedding endpoint: %s", settings.embedding_base_url)
            kwargs["base_url"] = settings.embedding_base_url
            kwargs["api_key"] = settings.openai_api_key or "EMPTY"
        else:
            kwargs["api_key"] = settings.openai_api_key
        embeddings = OpenAIEmbeddings(**kwargs)
    elif provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        embeddings = HuggingFaceEmbeddings(model_name=settings.embedding_model)
    else:
        raise ValueError(f"Unsupported embedding_provider: {settings.embedding_provider!r}")

    return LangChainEmbeddingClient(
        embeddings,
        model_name=settings.embedding_model,
        dimension=settings.embedding_dimension,
    )
