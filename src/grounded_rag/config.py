"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a helpful assistant. Use the provided context to answer the "
    "user's question. Do not make up information that is not supported by "
    "the context."
)


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    Instances are frozen: build one at process start (see
    :func:`get_settings`) and hand it to the adapter factories.
    """

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for local vLLM)")
    llm_model_name: str = Field(default="gpt-3.5-turbo", description="Chat model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for the chat-completion API. Leave empty to use OpenAI "
            "cloud, or point it at any OpenAI-compatible server."
        ),
    )
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION

    # Embedding
    embedding_provider: str = Field(default="openai", description="'openai' or 'huggingface'")
    embedding_model: str = "text-embedding-ada-002"
    embedding_base_url: str = ""
    embedding_dimension: int | None = Field(
        default=None,
        description="Expected vector length; checked on every embedding when set.",
    )

    # Vector index
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "grounded_rag"
    distance_metric: str = "cosine"
    upsert_batch_size: int = Field(default=5000, ge=1)
    retrieval_k: int = Field(default=5, ge=1)
    strict_index_queries: bool = Field(
        default=False,
        description="Raise on index query failures instead of returning no matches.",
    )

    # Ingestion
    chunk_size: int = Field(default=1000, ge=1)
    source_dir: str = "data/documents"
    source_glob: str = "**/*"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, built on first use."""
    return Settings()
