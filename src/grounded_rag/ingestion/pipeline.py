"""Ingestion pipeline — documents → pages → chunks → embeddings → index.

Processing is strictly sequential with one outstanding embedding request
at a time.  A failing page is logged and skipped; everything else that
goes wrong (opening a document, the final bulk write) propagates to the
caller.  All records of a run are written with a single
:meth:`VectorIndexBase.upsert` call once every page has been processed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from grounded_rag.errors import PageProcessingError
from grounded_rag.ingestion.chunker import chunk_page
from grounded_rag.ingestion.models import IngestionReport, PageFailure, PageResult
from grounded_rag.retrieval.models import IndexRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from grounded_rag.config import Settings
    from grounded_rag.ingestion.embedder import EmbeddingClient
    from grounded_rag.ingestion.loader import SourceDocument
    from grounded_rag.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Populate a vector index from a collection of source documents.

    Parameters
    ----------
    embedder:
        Embedding client used for every chunk.
    index:
        Destination vector index.
    chunk_size:
        Maximum characters per chunk.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndexBase,
        *,
        chunk_size: int = 1000,
    ) -> None:
        self._embedder = embedder
        self._index = index
        self.chunk_size = chunk_size

    def run(self, documents: Iterable[SourceDocument]) -> IngestionReport:
        """Ingest *documents* and return a report of what was indexed."""
        records: list[IndexRecord] = []
        report = IngestionReport()

        for document in documents:
            report.documents_seen += 1
            logger.info("Processing %s (%d pages)", document.doc_id, document.page_count)
            for page_number in range(1, document.page_count + 1):
                result = self.process_page(document, page_number)
                report.pages_processed += 1
                records.extend(result.records)
                if result.error is not None:
                    report.pages_failed += 1
                    report.failures.append(
                        PageFailure(
                            source_file=result.source_file,
                            page_number=result.page_number,
                            reason=result.error.reason,
                        )
                    )

        report.documents_indexed = self._index.upsert(records)
        logger.info(
            "Ingestion complete: %d chunks indexed from %d documents (%d/%d pages failed)",
            report.documents_indexed,
            report.documents_seen,
            report.pages_failed,
            report.pages_processed,
        )
        return report

    def process_page(self, document: SourceDocument, page_number: int) -> PageResult:
        """Extract, chunk and embed one page.

        Never raises: a failure is recorded on the returned
        :class:`PageResult` together with the records embedded before it.
        """
        result = PageResult(source_file=document.doc_id, page_number=page_number)
        try:
            text = document.page_text(page_number)
            chunks = chunk_page(
                text,
                source_id=document.doc_id,
                page_number=page_number,
                max_chunk_size=self.chunk_size,
            )
            vectors = self._embedder.embed_many(chunk.text for chunk in chunks)
            for chunk, vector in zip(chunks, vectors):
                result.records.append(IndexRecord.from_chunk(chunk, vector))
        except Exception as exc:
            result.error = PageProcessingError(document.doc_id, page_number, str(exc) or type(exc).__name__)
            logger.warning("%s", result.error)
        return result


def build_ingestion_pipeline(settings: Settings) -> IngestionPipeline:
    """Wire the configured embedding client and Chroma index."""
    from grounded_rag.ingestion.embedder import get_embedding_client
    from grounded_rag.retrieval.chroma_store import ChromaVectorIndex

    return IngestionPipeline(
        get_embedding_client(settings),
        ChromaVectorIndex.from_settings(settings),
        chunk_size=settings.chunk_size,
    )
