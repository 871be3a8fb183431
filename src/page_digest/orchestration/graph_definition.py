# src/page_digest/orchestration/graph_definition.py

import logging
from functools import partial

from langgraph.graph import StateGraph, END

from ..dependencies import get_content_extractor, get_summary_client
from .state import DigestState
from .constants import EXTRACT_NODE, SUMMARIZE_NODE
from .graph_logic import run_extract_content, run_summarize, route_after_extraction

logger = logging.getLogger(__name__)


def build_digest_graph(summarizer=None, extractor=None):
    """Builds and compiles the extract -> summarize workflow."""
    summarizer = summarizer or get_summary_client()
    extractor = extractor or get_content_extractor()

    workflow = StateGraph(DigestState)

    workflow.add_node(EXTRACT_NODE, partial(run_extract_content, extractor=extractor))
    workflow.add_node(SUMMARIZE_NODE, partial(run_summarize, summarizer=summarizer))

    workflow.set_entry_point(EXTRACT_NODE)

    workflow.add_conditional_edges(
        EXTRACT_NODE,
        route_after_extraction,
        {
            SUMMARIZE_NODE: SUMMARIZE_NODE,
            END: END,
        },
    )
    workflow.add_edge(SUMMARIZE_NODE, END)

    return workflow.compile()


digest_graph = build_digest_graph()

logger.info("Page digest graph compiled successfully.")
