"""
Query — grounded question answering built with LangGraph.

Public API
----------
- :class:`QueryPipeline` — embed → retrieve → generate.
- :class:`QueryResult` / :class:`QueryStatus` — the outcome of a query.
- :func:`build_graph` — compile the underlying workflow.
"""

from grounded_rag.query.graph import build_graph
from grounded_rag.query.pipeline import QueryPipeline, QueryResult, build_query_pipeline
from grounded_rag.query.state import QueryState, QueryStatus

__all__ = [
    "QueryPipeline",
    "QueryResult",
    "QueryState",
    "QueryStatus",
    "build_graph",
    "build_query_pipeline",
]
