from .summary_client import (
    SummaryClient,
    SummarizerInterface,
    SummaryError,
    RetryableSummaryError,
    SummaryFormatError,
)
from .content_extractor import (
    ContentExtractor,
    ContentFetchError,
    ContentNotFoundError,
    extract_main_content,
)

__all__ = [
    "SummaryClient",
    "SummarizerInterface",
    "SummaryError",
    "RetryableSummaryError",
    "SummaryFormatError",
    "ContentExtractor",
    "ContentFetchError",
    "ContentNotFoundError",
    "extract_main_content",
]
