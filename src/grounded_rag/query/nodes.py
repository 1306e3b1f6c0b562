"""Graph nodes — each method is one stage of the query workflow.

Node contract
-------------
* Accepts the full :class:`QueryState` dict.
* Returns a *partial* dict with **only the keys that changed**.
* Upstream failures raise and end the run; nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from grounded_rag.generation.prompts import SYSTEM_INSTRUCTION, build_context_block, build_grounded_prompt
from grounded_rag.query.state import QueryState, QueryStatus

if TYPE_CHECKING:
    from grounded_rag.generation.llm import GenerationClient
    from grounded_rag.ingestion.embedder import EmbeddingClient
    from grounded_rag.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class QueryNodes:
    """The three query stages bound to their collaborators.

    Parameters
    ----------
    embedder:
        Embeds the question.
    index:
        Vector index searched for context.
    generator:
        Chat-completion client producing the answer.
    k:
        Number of chunks to retrieve.
    temperature:
        Sampling temperature for generation.
    system_instruction:
        Grounding instruction sent as the system message.
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
        self._embedder = embedder
        self._index = index
        self._generator = generator
        self.k = k
        self.temperature = temperature
        self.system_instruction = system_instruction

    # ── 1. EMBED ──────────────────────────────────────────────────────

    def embed_question(self, state: QueryState) -> dict[str, Any]:
        """Embed the question.  ``EmbeddingError`` ends the query."""
        return {"embedding": self._embedder.embed(state["question"])}

    # ── 2. RETRIEVE ───────────────────────────────────────────────────

    def retrieve(self, state: QueryState) -> dict[str, Any]:
        """Fetch the top-*k* chunks for the question's embedding."""
        retrieved = self._index.query(state["embedding"], k=self.k)
        logger.info("Retrieved %d chunk(s) (k=%d)", len(retrieved), self.k)
        if not retrieved:
            return {"retrieved": [], "status": QueryStatus.NO_RELEVANT_CONTENT}
        return {"retrieved": retrieved}

    # ── 3. GENERATE ───────────────────────────────────────────────────

    def generate(self, state: QueryState) -> dict[str, Any]:
        """Answer the question from the retrieved context."""
        texts = [chunk.chunk_text for chunk in state["retrieved"]]
        messages = build_grounded_prompt(
            state["question"],
            texts,
            system_instruction=self.system_instruction,
        )
        answer = self._generator.generate(messages, temperature=self.temperature)
        return {
            "context": build_context_block(texts),
            "answer": answer,
            "status": QueryStatus.ANSWERED,
        }


# ── ROUTING (conditional edge) ────────────────────────────────────────


def route_after_retrieval(state: QueryState) -> str:
    """Conditional edge after ``retrieve``.

    Returns
    -------
    str
        ``"end"`` when nothing was retrieved, otherwise ``"generate"``.
    """
    if state.get("status") == QueryStatus.NO_RELEVANT_CONTENT:
        return "end"
    return "generate"
