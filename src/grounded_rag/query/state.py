"""Query state definition — shared across all graph nodes."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypedDict

from grounded_rag.retrieval.models import RetrievedChunk


class QueryStatus(str, Enum):
    """Terminal outcome of a query."""

    PENDING = "pending"
    ANSWERED = "answered"
    NO_RELEVANT_CONTENT = "no_relevant_content"


class QueryState(TypedDict):
    """Typed state that flows through the query graph.

    Attributes
    ----------
    question:
        The caller's question.
    embedding:
        Vector for ``question`` (set by ``embed_question``).
    retrieved:
        Chunks returned by the index, most similar first.
    context:
        The context block sent to the model (set by ``generate``).
    answer:
        The generated answer text.
    status:
        :class:`QueryStatus` value; stays ``pending`` until a terminal
        node runs.
    """

    question: str
    embedding: list[float]
    retrieved: list[RetrievedChunk]
    context: str
    answer: str
    status: QueryStatus


def create_initial_state(question: str) -> dict[str, Any]:
    """Build the initial state dict for ``graph.invoke()``."""
    return {
        "question": question,
        "embedding": [],
        "retrieved": [],
        "context": "",
        "answer": "",
        "status": QueryStatus.PENDING,
    }
