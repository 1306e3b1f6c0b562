"""Query pipeline — question in, grounded answer (or "no content") out.

Usage::

    from grounded_rag.config import get_settings
    from grounded_rag.query.pipeline import build_query_pipeline

    pipeline = build_query_pipeline(get_settings())
    result = pipeline.answer("What is the return policy?")
    if result.found_content:
        print(result.answer)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from grounded_rag.generation.prompts import SYSTEM_INSTRUCTION
from grounded_rag.query.graph import build_graph
from grounded_rag.query.nodes import QueryNodes
from grounded_rag.query.state import QueryStatus, create_initial_state
from grounded_rag.retrieval.models import RetrievedChunk

if TYPE_CHECKING:
    from grounded_rag.config import Settings
    from grounded_rag.generation.llm import GenerationClient
    from grounded_rag.ingestion.embedder import EmbeddingClient
    from grounded_rag.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class QueryResult(BaseModel):
    """Outcome of one query.

    ``status`` is ``no_relevant_content`` when retrieval found nothing;
    in that case ``answer`` is ``None`` and generation never ran.
    """

    status: QueryStatus
    answer: str | None = None
    context: str = ""
    sources: list[RetrievedChunk] = Field(default_factory=list)

    @property
    def found_content(self) -> bool:
        return self.status == QueryStatus.ANSWERED


class QueryPipeline:
    """Embed → retrieve → generate, compiled once and reused per query.

    Each call to :meth:`answer` builds its own state, so one pipeline can
    serve concurrent callers without locking.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndexBase,
        generator: GenerationClient,
        *,
        k: int = 5,
        temperature: float = 0.7,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ) -> None:
        self.nodes = QueryNodes(
            embedder,
            index,
            generator,
            k=k,
            temperature=temperature,
            system_instruction=system_instruction,
        )
        self._graph = build_graph(self.nodes)

    def answer(self, question: str) -> QueryResult:
        """Answer *question* from the indexed content.

        Raises
        ------
        UpstreamError
            When embedding the question or generating the answer fails.
            ``exc.stage`` names the failing stage.
        """
        final = self._graph.invoke(create_initial_state(question))
        status = final["status"]
        if status == QueryStatus.NO_RELEVANT_CONTENT:
            logger.info("No relevant content for question")
            return QueryResult(status=status)
        return QueryResult(
            status=status,
            answer=final["answer"],
            context=final["context"],
            sources=final["retrieved"],
        )


def build_query_pipeline(settings: Settings) -> QueryPipeline:
    """Wire the configured embedding client, Chroma index and chat model."""
    from grounded_rag.generation.llm import get_generation_client
    from grounded_rag.ingestion.embedder import get_embedding_client
    from grounded_rag.retrieval.chroma_store import ChromaVectorIndex

    return QueryPipeline(
        get_embedding_client(settings),
        ChromaVectorIndex.from_settings(settings),
        get_generation_client(settings),
        k=settings.retrieval_k,
        temperature=settings.llm_temperature,
        system_instruction=settings.system_instruction,
    )
