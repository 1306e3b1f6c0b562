"""
Generation — grounded prompt construction and the chat-completion client.

Public API
----------
- :func:`build_grounded_prompt` — system instruction + context + question.
- :class:`GenerationClient` — abstract chat-completion backend.
- :class:`ChatModelGenerationClient` — LangChain chat-model adapter.
"""

from grounded_rag.generation.llm import ChatModelGenerationClient, GenerationClient, get_generation_client
from grounded_rag.generation.prompts import SYSTEM_INSTRUCTION, build_context_block, build_grounded_prompt

__all__ = [
    "SYSTEM_INSTRUCTION",
    "ChatModelGenerationClient",
    "GenerationClient",
    "build_context_block",
    "build_grounded_prompt",
    "get_generation_client",
]
