"""FastAPI application exposing ingestion and grounded question answering."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from grounded_rag.config import get_settings
from grounded_rag.errors import RAGError
from grounded_rag.ingestion.loader import DirectorySource, DocumentSource
from grounded_rag.ingestion.pipeline import IngestionPipeline, build_ingestion_pipeline
from grounded_rag.query.pipeline import QueryPipeline, build_query_pipeline

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No relevant content found to answer the question."


@asynccontextmanager
async def lifespan(_: FastAPI):
    logging.basicConfig(level=get_settings().log_level)
    yield


app = FastAPI(
    title="Grounded RAG API",
    version="0.1.0",
    description="Document ingestion and retrieval-grounded question answering.",
    lifespan=lifespan,
)


# ── Request / Response schemas ────────────────────────────────────────
class QueryRequest(BaseModel):
    """Incoming question from the user."""

    question: str = Field(min_length=1)


class QueryResponse(BaseModel):
    """Generated answer."""

    answer: str


class IngestResponse(BaseModel):
    """Result of an ingestion run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Data preparation complete"
    documents_indexed: int
    pages_failed: int = 0


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_query_pipeline() -> QueryPipeline:
    return build_query_pipeline(get_settings())


@lru_cache(maxsize=1)
def get_ingestion_pipeline() -> IngestionPipeline:
    return build_ingestion_pipeline(get_settings())


def get_document_source() -> DocumentSource:
    settings = get_settings()
    return DirectorySource(settings.source_dir, glob=settings.source_glob)


# ── Error handling ────────────────────────────────────────────────────
@app.exception_handler(RAGError)
async def rag_error_handler(_: Request, exc: RAGError) -> JSONResponse:
    logger.error("Request failed at stage %s: %s", exc.stage, exc)
    return JSONResponse(status_code=500, content={"error": str(exc), "stage": exc.stage})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/ingest", response_model=IngestResponse)
def ingest(
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    source: DocumentSource = Depends(get_document_source),
) -> IngestResponse:
    """Ingest every document from the configured source into the index."""
    report = pipeline.run(source)
    return IngestResponse(documents_indexed=report.documents_indexed, pages_failed=report.pages_failed)


@app.post("/query", response_model=QueryResponse)
def query(
    request: QueryRequest,
    pipeline: QueryPipeline = Depends(get_query_pipeline),
) -> QueryResponse:
    """Answer a question from the indexed documents."""
    result = pipeline.answer(request.question)
    if not result.found_content:
        raise HTTPException(status_code=404, detail=NO_CONTENT_MESSAGE)
    return QueryResponse(answer=result.answer or "")
