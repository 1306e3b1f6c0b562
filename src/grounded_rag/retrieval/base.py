"""Abstract base class for vector index backends.

Adding a new backend (Azure AI Search, Pinecone, Qdrant …) only requires
subclassing :class:`VectorIndexBase` and implementing the three abstract
methods.  The ingestion and query pipelines are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from grounded_rag.retrieval.models import IndexRecord, RetrievedChunk


class VectorIndexBase(ABC):
    """Backend-agnostic vector index interface.

    Parameters
    ----------
    index_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name

    @abstractmethod
    def upsert(self, records: Sequence[IndexRecord]) -> int:
        """Write *records* and return how many were written.

        Raises
        ------
        IndexWriteError
            When the backend rejects the write.  Implementations must
            never drop records silently.
        """
        ...

    @abstractmethod
    def query(self, vector: list[float], *, k: int = 5) -> list[RetrievedChunk]:
        """Return up to *k* chunks nearest to *vector*, most similar first.

        Implementations may degrade a failed query to an empty list
        rather than raising.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
