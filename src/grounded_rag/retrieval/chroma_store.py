"""Chroma implementation of the vector index abstraction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import chromadb

from grounded_rag.errors import IndexQueryError, IndexWriteError
from grounded_rag.retrieval.base import VectorIndexBase
from grounded_rag.retrieval.models import RetrievedChunk

if TYPE_CHECKING:
    from collections.abc import Sequence

    from grounded_rag.config import Settings
    from grounded_rag.retrieval.models import IndexRecord

logger = logging.getLogger(__name__)


class ChromaVectorIndex(VectorIndexBase):
    """Chroma-backed vector index.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    client:
        A ready Chroma client.  ``from_settings`` builds an ``HttpClient``.
    distance_metric:
        HNSW space used when the collection is created
        (``cosine`` | ``l2`` | ``ip``).
    upsert_batch_size:
        Max records per underlying ``collection.upsert`` call.
    strict:
        When ``True`` query failures raise :class:`IndexQueryError`;
        otherwise they are logged and reported as "no matches".
    """

    def __init__(
        self,
        collection_name: str,
        *,
        client: Any,
        distance_metric: str = "cosine",
        upsert_batch_size: int = 5000,
        strict: bool = False,
    ) -> None:
        super().__init__(collection_name)
        self._client = client
        self._collection = client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": distance_metric},
        )
        self.upsert_batch_size = upsert_batch_size
        self.strict = strict

    @classmethod
    def from_settings(cls, settings: Settings) -> ChromaVectorIndex:
        client = chromadb.HttpClient(host=settings.chroma_host, port=settings.chroma_port)
        return cls(
            settings.chroma_collection,
            client=client,
            distance_metric=settings.distance_metric,
            upsert_batch_size=settings.upsert_batch_size,
            strict=settings.strict_index_queries,
        )

    # -- VectorIndexBase overrides --------------------------------------------

    def upsert(self, records: Sequence[IndexRecord]) -> int:
        if not records:
            logger.info("No records to index in collection %r", self.index_name)
            return 0

        written = 0
        try:
            for start in range(0, len(records), self.upsert_batch_size):
                batch = records[start : start + self.upsert_batch_size]
                self._collection.upsert(
                    ids=[r.id for r in batch],
                    embeddings=[r.embedding_vector for r in batch],
                    documents=[r.chunk_text for r in batch],
                    metadatas=[r.metadata() for r in batch],
                )
                written += len(batch)
                logger.debug("  upserted %d / %d", written, len(records))
        except Exception as exc:
            raise IndexWriteError(
                f"Writing to collection {self.index_name!r} failed after "
                f"{written} of {len(records)} records: {type(exc).__name__}"
            ) from exc

        logger.info("Indexed %d records in collection %r", written, self.index_name)
        return written

    def query(self, vector: list[float], *, k: int = 5) -> list[RetrievedChunk]:
        try:
            results = self._collection.query(
                query_embeddings=[vector],
                n_results=k,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            if self.strict:
                raise IndexQueryError(
                    f"Querying collection {self.index_name!r} failed: {type(exc).__name__}"
                ) from exc
            logger.warning("Chroma query failed; treating as no matches", exc_info=True)
            return []

        docs = (results.get("documents") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        hits: list[RetrievedChunk] = []
        for content, meta, dist in zip(docs, metas, distances):
            if not content:
                continue
            meta = meta or {}
            hits.append(
                RetrievedChunk(
                    chunk_text=content,
                    # Chroma returns distances; convert to a 0-1 similarity score.
                    score=1.0 / (1.0 + dist) if dist is not None else None,
                    source_file=meta.get("source_file"),
                    page_number=meta.get("page_number"),
                )
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
