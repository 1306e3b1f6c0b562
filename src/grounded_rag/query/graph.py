"""LangGraph graph definition — the grounded query workflow.

1. **Embed** the question.
2. **Retrieve** the top-k chunks from the vector index.
3. **Generate** an answer from those chunks, unless retrieval came back
   empty, in which case the run ends with ``no_relevant_content``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langgraph.graph import END, StateGraph

from grounded_rag.query.nodes import route_after_retrieval
from grounded_rag.query.state import QueryState

if TYPE_CHECKING:
    from grounded_rag.query.nodes import QueryNodes


def build_graph(nodes: QueryNodes):
    """Construct and return the compiled query graph.

    Graph topology::

        ┌────────────────┐
        │ embed_question │
        └───────┬────────┘
                ▼
        ┌────────────────┐   no matches
        │    retrieve    ├──────────────┐
        └───────┬────────┘              │
                ▼                       │
        ┌────────────────┐              │
        │    generate    │              │
        └───────┬────────┘              │
                ▼                       ▼
             [ END ] ◄──────────────────┘

    Returns
    -------
    CompiledGraph
        A compiled LangGraph workflow ready for ``.invoke()``.
    """
    workflow = StateGraph(QueryState)

    # -- Nodes ---------------------------------------------------------------
    workflow.add_node("embed_question", nodes.embed_question)
    workflow.add_node("retrieve", nodes.retrieve)
    workflow.add_node("generate", nodes.generate)

    # -- Edges ---------------------------------------------------------------
    workflow.set_entry_point("embed_question")
    workflow.add_edge("embed_question", "retrieve")
    workflow.add_conditional_edges(
        "retrieve",
        route_after_retrieval,
        {
            "generate": "generate",
            "end": END,
        },
    )
    workflow.add_edge("generate", END)

    return workflow.compile()
