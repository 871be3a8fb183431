# src/page_digest/dependencies.py

import logging
from functools import lru_cache

from .services.summary_client import SummaryClient, SummarizerInterface
from .services.content_extractor import ContentExtractor

logger = logging.getLogger(__name__)

@lru_cache()
def get_summary_client() -> SummarizerInterface:
    """Dependency function to get a cached SummarizerInterface implementation (SummaryClient)."""
    logger.info("Initializing SummaryClient instance (as SummarizerInterface).")
    client = SummaryClient()
    if not client.api_key:
        # The summarize node reports the missing key when it is called
        logger.warning("SummaryClient initialized, but API key was not found.")
    return client

@lru_cache()
def get_content_extractor() -> ContentExtractor:
    """Dependency function to get a cached ContentExtractor."""
    return ContentExtractor()
