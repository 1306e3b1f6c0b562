"""
Retrieval — the vector index behind a backend-agnostic interface.

Public surface
--------------
- :class:`VectorIndexBase` — abstract backend (subclass for other stores).
- :class:`ChromaVectorIndex` — default Chroma backend.
- :class:`IndexRecord`, :class:`RetrievedChunk` — data models.
"""

from grounded_rag.retrieval.base import VectorIndexBase
from grounded_rag.retrieval.models import IndexRecord, RetrievedChunk

__all__ = [
    "ChromaVectorIndex",
    "IndexRecord",
    "RetrievedChunk",
    "VectorIndexBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorIndex to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorIndex":
        from grounded_rag.retrieval.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
