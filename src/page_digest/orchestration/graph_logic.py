# src/page_digest/orchestration/graph_logic.py

import logging
from typing import Literal

from langgraph.graph import END

from ..services.content_extractor import (
    ContentExtractor,
    ContentFetchError,
    ContentNotFoundError,
)
from ..services.summary_client import SummarizerInterface
from .state import DigestState
from .constants import SUMMARIZE_NODE

logger = logging.getLogger(__name__)

# --- Node Logic Functions ---

async def run_extract_content(state: DigestState, extractor: ContentExtractor) -> DigestState:
    """Resolves the page to article text. Empty content is terminal."""
    logger.info("--- Running Content Extractor Node ---")
    state.error_message = None
    state.failed_stage = None

    try:
        content = await extractor.extract(url=state.url, html=state.html)
        if not content:
            raise ContentNotFoundError()
        state.content = content
        logger.info(f"Extracted {len(content)} characters of content.")
    except (ContentNotFoundError, ContentFetchError, ValueError) as e:
        logger.warning(f"Content extraction failed: {e}")
        state.content = None
        state.error_message = str(e)
        state.failed_stage = "extract"

    return state

async def run_summarize(state: DigestState, summarizer: SummarizerInterface) -> DigestState:
    """Requests the five-point summary for the extracted content."""
    logger.info("--- Running Summarizer Node ---")
    state.points = []

    try:
        state.points = await summarizer.summarize(state.content, max_retries=state.max_retries)
        logger.info(f"Generated {len(state.points)} summary points.")
    except Exception as e:
        logger.error(f"Summarization failed: {e}", exc_info=True)
        state.error_message = str(e) or e.__class__.__name__
        state.failed_stage = "summarize"

    return state

# --- Routing Functions ---

def route_after_extraction(state: DigestState) -> Literal["SUMMARIZE", "__end__"]:
    """Skips summarization when there is nothing to summarize."""
    if state.error_message or not state.content:
        logger.info("Routing to END: no content to summarize.")
        return END
    return SUMMARIZE_NODE
