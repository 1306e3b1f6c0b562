"""Data models produced while ingesting documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from grounded_rag.errors import PageProcessingError
from grounded_rag.retrieval.models import IndexRecord


@dataclass(frozen=True)
class Chunk:
    """A bounded-size fragment of one page's text.

    Attributes
    ----------
    text:
        The chunk's words joined by single spaces.
    source_id:
        Identifier of the document the page belongs to.
    page_number:
        1-based page number.
    index:
        0-based sequence index of the chunk within its page.
    """

    text: str
    source_id: str
    page_number: int
    index: int


@dataclass
class PageResult:
    """Outcome of processing one page.

    ``records`` holds every chunk embedded before ``error`` (if any)
    occurred, so a failure part-way through a page keeps its siblings.
    """

    source_file: str
    page_number: int
    records: list[IndexRecord] = field(default_factory=list)
    error: PageProcessingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PageFailure(BaseModel):
    """Serializable summary of a skipped page."""

    source_file: str
    page_number: int
    reason: str


class IngestionReport(BaseModel):
    """Summary of one ingestion run.

    Attributes
    ----------
    documents_indexed:
        Number of chunk records written to the vector index.
    documents_seen:
        Number of source documents iterated.
    pages_processed:
        Number of pages attempted, including failed ones.
    pages_failed:
        Number of pages that raised while being processed.
    failures:
        One entry per failed page.
    """

    documents_indexed: int = 0
    documents_seen: int = 0
    pages_processed: int = 0
    pages_failed: int = 0
    failures: list[PageFailure] = Field(default_factory=list)
