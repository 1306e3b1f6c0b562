"""Chat model initialisation and the generation client.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible server** — set ``LLM_BASE_URL`` to e.g. a vLLM
   endpoint exposing ``/v1/chat/completions``; ``ChatOpenAI`` works
   unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

from grounded_rag.errors import GenerationError

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel
    from langchain_core.messages import BaseMessage

    from grounded_rag.config import Settings

logger = logging.getLogger(__name__)


def get_llm(settings: Settings) -> ChatOpenAI:
    """Return the configured chat model.

    When ``settings.llm_base_url`` is set the client is pointed at that
    server instead of the OpenAI cloud API.  A dummy API key
    (``"EMPTY"``) is used when none is configured, because self-hosted
    servers usually do not require authentication.
    """
    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
    }

    if settings.llm_base_url:
        logger.info("Using chat-completion endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)


class GenerationClient(ABC):
    """Provider-agnostic chat-completion interface."""

    @abstractmethod
    def generate(self, messages: list[BaseMessage], *, temperature: float) -> str:
        """Return the completion text for *messages*.

        Raises
        ------
        GenerationError
            When the upstream call fails or returns no text.
        """
        ...


class ChatModelGenerationClient(GenerationClient):
    """Adapter over a LangChain chat model."""

    def __init__(self, chat_model: BaseChatModel) -> None:
        self._chat_model = chat_model

    def generate(self, messages: list[BaseMessage], *, temperature: float) -> str:
        try:
            response = self._chat_model.invoke(messages, temperature=temperature)
        except Exception as exc:
            raise GenerationError(f"Chat completion failed: {type(exc).__name__}") from exc

        content = response.content
        if not isinstance(content, str) or not content:
            raise GenerationError("Chat completion returned no text")
        return content


def get_generation_client(settings: Settings) -> ChatModelGenerationClient:
    return ChatModelGenerationClient(get_llm(settings))
