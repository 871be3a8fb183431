from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..services.summary_client import DEFAULT_MAX_RETRIES


class DigestState(BaseModel):
    """Represents the state of one page digest run.

    Attributes:
        url: The page address, fetched when no html is supplied.
        html: Page markup captured by the client, if any.
        max_retries: Retry budget passed to the summarizer.
        content: Extracted article text.
        points: The five summary points on success.
        error_message: Terminal error shown to the user.
        failed_stage: Which node produced the error ("extract" or "summarize").
    """

    url: Optional[str] = None
    html: Optional[str] = None
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    content: Optional[str] = None
    points: List[str] = Field(default_factory=list)
    error_message: Optional[str] = None
    failed_stage: Optional[Literal["extract", "summarize"]] = None
