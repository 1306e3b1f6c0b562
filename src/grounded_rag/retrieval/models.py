"""Domain models for index records and retrieval results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from grounded_rag.ingestion.models import Chunk


class IndexRecord(BaseModel):
    """One embedded chunk as written to the vector index.

    Attributes
    ----------
    id:
        Freshly generated identifier.  It is independent of the content,
        so ingesting the same source twice stores the text twice.
    chunk_text:
        The chunk's text, stored in the index's free-text field.
    embedding_vector:
        Dense vector for ``chunk_text``.
    source_file:
        Identifier of the source document (usually a filename).
    page_number:
        1-based page the chunk was taken from.
    chunk_index:
        0-based position of the chunk within its page.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    chunk_text: str
    embedding_vector: list[float] = Field(min_length=1)
    source_file: str
    page_number: int
    chunk_index: int = 0

    @classmethod
    def from_chunk(cls, chunk: Chunk, vector: list[float]) -> IndexRecord:
        return cls(
            chunk_text=chunk.text,
            embedding_vector=vector,
            source_file=chunk.source_id,
            page_number=chunk.page_number,
            chunk_index=chunk.index,
        )

    def metadata(self) -> dict[str, Any]:
        """Flat metadata fields stored next to the vector."""
        return {
            "source_file": self.source_file,
            "page_number": self.page_number,
            "chunk_index": self.chunk_index,
        }


class RetrievedChunk(BaseModel):
    """A chunk returned by a nearest-neighbour query, most similar first."""

    chunk_text: str
    score: float | None = None
    source_file: str | None = None
    page_number: int | None = None

    def __str__(self) -> str:  # noqa: D105
        source = self.source_file or "unknown"
        page = self.page_number if self.page_number is not None else "?"
        return f"[{source} p.{page}] {self.chunk_text[:120]}"
