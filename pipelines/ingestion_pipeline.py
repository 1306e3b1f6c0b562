"""KFP v2 pipeline — offline ingestion of a document directory.

Populates the Chroma collection that the query service reads from.  The
two sides share nothing but the collection.

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
    # then submit the YAML to a KFP-compatible backend
"""

from kfp import compiler, dsl

from pipelines.components.ingest import ingest_documents


@dsl.pipeline(
    name="grounded-rag-ingestion",
    description="Extract pages → chunk → embed → bulk-index into Chroma.",
)
def ingestion_pipeline(
    source_path: str = "/data/documents",
    glob_pattern: str = "**/*",
    chroma_host: str = "chroma.kubeflow.svc.cluster.local",
    chroma_port: int = 8000,
    collection_name: str = "grounded_rag",
    embedding_provider: str = "openai",
    embedding_model: str = "text-embedding-ada-002",
    chunk_size: int = 1000,
    upsert_batch_size: int = 5000,
) -> None:
    """Single-step ingestion run; see ``ingest_documents`` for parameters."""
    ingest_documents(
        source_path=source_path,
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        collection_name=collection_name,
        glob_pattern=glob_pattern,
        embedding_provider=embedding_provider,
        embedding_model=embedding_model,
        chunk_size=chunk_size,
        upsert_batch_size=upsert_batch_size,
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Grounded RAG ingestion pipeline")
    parser.add_argument("--compile", action="store_true", help="Compile pipeline to YAML")
    parser.add_argument(
        "--output",
        default="pipelines/compiled/ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
