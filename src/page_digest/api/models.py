from pydantic import BaseModel, Field
from typing import List, Optional

from ..services.summary_client import DEFAULT_MAX_RETRIES, SUMMARY_POINT_COUNT


class DigestRequest(BaseModel):
    """Request model for summarizing a page. Supply the page URL, its HTML, or both."""
    url: Optional[str] = None # Fetched when html is absent
    html: Optional[str] = None # Markup captured by the client (e.g. a browser extension)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, le=5)

class DigestResponse(BaseModel):
    """Response model carrying the five summary points."""
    points: List[str] = Field(min_length=SUMMARY_POINT_COUNT, max_length=SUMMARY_POINT_COUNT)
    url: Optional[str] = None
