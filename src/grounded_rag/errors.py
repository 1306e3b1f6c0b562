"""Error taxonomy shared by the ingestion and query pipelines.

Adapters translate third-party exceptions into these types (chaining the
original with ``raise ... from``) so callers only ever handle
:class:`RAGError` subclasses.  Messages name the failing stage and the
upstream exception class; they never echo request payloads or keys.
"""

from __future__ import annotations


class RAGError(Exception):
    """Base class for every error raised by ``grounded_rag``."""

    stage: str = "pipeline"


class UpstreamError(RAGError):
    """A call to the embedding or generation service failed.

    Attributes
    ----------
    stage:
        The pipeline stage that failed (``"embed"`` or ``"generate"``).
    """

    stage = "upstream"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class EmbeddingError(UpstreamError):
    """The embedding service failed or returned no usable vector."""

    stage = "embed"


class GenerationError(UpstreamError):
    """The chat-completion service failed or returned no text."""

    stage = "generate"


class VectorIndexError(RAGError):
    """Base class for vector index failures."""

    stage = "index"


class IndexWriteError(VectorIndexError):
    """A bulk write to the vector index failed."""

    stage = "index_write"


class IndexQueryError(VectorIndexError):
    """A nearest-neighbour query against the vector index failed."""

    stage = "retrieve"


class PageProcessingError(RAGError):
    """Extracting, chunking or embedding a single page failed."""

    stage = "ingest_page"

    def __init__(self, source_file: str, page_number: int, reason: str) -> None:
        super().__init__(f"Error processing page {page_number} in {source_file}: {reason}")
        self.source_file = source_file
        self.page_number = page_number
        self.reason = reason
