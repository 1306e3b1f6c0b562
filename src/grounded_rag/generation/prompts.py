"""Prompt templates for grounded answer generation.

Keeping the prompt in one place makes the exact text sent to the chat
model easy to audit and to assert on in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

from grounded_rag.config import DEFAULT_SYSTEM_INSTRUCTION

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.messages import BaseMessage

SYSTEM_INSTRUCTION = DEFAULT_SYSTEM_INSTRUCTION

CONTEXT_SEPARATOR = "\n\n"


def build_context_block(texts: Sequence[str]) -> str:
    """Join retrieved chunk texts, in retrieval order, with blank lines."""
    return CONTEXT_SEPARATOR.join(texts)


def build_user_message(question: str, context: str) -> str:
    return f"Context:\n{context}\n\nQuestion:\n{question}"


def build_grounded_prompt(
    question: str,
    texts: Sequence[str],
    *,
    system_instruction: str = SYSTEM_INSTRUCTION,
) -> list[BaseMessage]:
    """Assemble the messages for one grounded generation call.

    Parameters
    ----------
    question:
        The caller's question, passed through verbatim.
    texts:
        Retrieved chunk texts, most relevant first.
    system_instruction:
        Instruction restricting the model to the supplied context.

    Returns
    -------
    list[BaseMessage]
        ``[SystemMessage, HumanMessage]`` ready for ``.invoke()``.
    """
    context = build_context_block(texts)
    return [
        SystemMessage(content=system_instruction),
        HumanMessage(content=build_user_message(question, context)),
    ]
