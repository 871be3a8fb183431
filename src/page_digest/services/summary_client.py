import asyncio
import logging
import re
from abc import abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, runtime_checkable

import httpx

from ..config import Settings, get_settings
from ..llm.prompts import get_summary_prompt

logger = logging.getLogger(__name__)

# Generation parameters sent with every request
MAX_TOKENS = 1024
TEMPERATURE = 0.3
TOP_P = 0.8
TOP_K = 50
REPETITION_PENALTY = 1.1

DEFAULT_MAX_RETRIES = 2
RETRY_DELAY_SECONDS = 2.0
MIN_SUMMARY_LENGTH = 10
SUMMARY_POINT_COUNT = 5

NUMBERED_POINT_PATTERN = re.compile(r"^\d+[.)]\s")
NUMBERING_PREFIX_PATTERN = re.compile(r"^\d+[.)]\s*")


# --- Errors ---

class SummaryError(Exception):
    """Base error for the summarization client."""

    retryable = False


class RetryableSummaryError(SummaryError):
    """Transient failure: network, bad envelope, degenerate output."""

    retryable = True


class SummaryFormatError(SummaryError):
    """The response violates the completion contract; retrying cannot help."""

    retryable = False


# --- Interface ---

@runtime_checkable
class SummarizerInterface(Protocol):
    """Abstract interface for the article summarizer."""

    @property
    @abstractmethod
    def api_key(self) -> Optional[str]:
        """Returns the API key used by the client, if configured."""
        ...

    @abstractmethod
    async def summarize(self, text: str, max_retries: int = DEFAULT_MAX_RETRIES) -> List[str]:
        """Summarizes article text into exactly five factual points.

        Args:
            text: The article text.
            max_retries: Retries allowed after the first attempt.

        Returns:
            A list of exactly five point strings.

        Raises:
            ValueError: If the API key is missing.
            SummaryError: If no valid summary was produced.
        """
        ...


# --- Response parsing ---

def extract_completion_text(data: Any) -> Any:
    """Pulls the generated text out of a completion response body.

    A body without a usable ``output`` object is a transient failure. A body whose
    ``output`` has no choices breaks the contract and is reported as such. The
    returned value is not type-checked here.
    """
    output = data.get("output") if isinstance(data, dict) else None
    if not output or not isinstance(output, dict):
        raise RetryableSummaryError("Invalid API response structure")

    choices = output.get("choices")
    if not isinstance(choices, list) or not choices:
        raise SummaryFormatError("No summary text found in API response")

    first_choice = choices[0]
    if isinstance(first_choice, dict) and first_choice.get("text"):
        return first_choice["text"]
    return first_choice


def parse_summary_points(summary: str) -> List[str]:
    """Returns the numbered points of a summary, numbering stripped."""
    return [
        NUMBERING_PREFIX_PATTERN.sub("", line, count=1).strip()
        for line in summary.split("\n")
        if NUMBERED_POINT_PATTERN.match(line)
    ]


# --- Concrete Implementation ---

class SummaryClient(SummarizerInterface):
    """Client for a hosted text-completion endpoint that returns five-point summaries."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        retry_delay: float = RETRY_DELAY_SECONDS,
    ):
        self.settings = settings or get_settings()
        self._http_client = http_client
        self._sleep = sleep
        self.retry_delay = retry_delay
        if not self.settings.api_key:
            logger.warning("TOGETHER_API_KEY environment variable not set.")

    @property
    def api_key(self) -> Optional[str]:
        return self.settings.api_key

    async def summarize(self, text: str, max_retries: int = DEFAULT_MAX_RETRIES) -> List[str]:
        if not self.api_key:
            raise ValueError("Summary client not configured. API key may be missing.")
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")

        prompt = get_summary_prompt(text)
        total_attempts = max_retries + 1

        for attempt in range(total_attempts):
            is_last_attempt = attempt == max_retries
            logger.info(f"Summary attempt {attempt + 1}/{total_attempts}")
            try:
                return await self._attempt(prompt)
            except SummaryError as e:
                if not e.retryable or is_last_attempt:
                    logger.error(f"Summary failed on attempt {attempt + 1}: {e}")
                    raise
                logger.warning(f"Attempt {attempt + 1} failed ({e}), retrying...")
            except Exception as e:
                if is_last_attempt:
                    logger.error(f"Summary failed on attempt {attempt + 1}: {e}")
                    raise
                logger.warning(f"Error on attempt {attempt + 1}: {e!r}, retrying...")
            await self._sleep(self.retry_delay)

    async def _attempt(self, prompt: str) -> List[str]:
        """Runs a single request and validates its result."""
        data = await self._request_completion(prompt)
        logger.debug(f"Raw API response: {data}")

        summary = extract_completion_text(data)
        if not isinstance(summary, str):
            raise SummaryFormatError("Summary is not a string")

        summary = summary.strip()
        logger.debug(f"Cleaned summary: {summary[:200]}")
        if len(summary) < MIN_SUMMARY_LENGTH:
            raise RetryableSummaryError("Generated summary too short")

        points = parse_summary_points(summary)
        if len(points) < SUMMARY_POINT_COUNT:
            logger.info(f"Only {len(points)} numbered points found in summary.")
            raise RetryableSummaryError("Could not generate proper summary")

        return points[:SUMMARY_POINT_COUNT]

    async def _request_completion(self, prompt: str) -> Any:
        payload = self._build_payload(prompt)
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.settings.api_url, headers=self._headers(), json=payload
                )
            else:
                async with httpx.AsyncClient(timeout=self.settings.request_timeout) as client:
                    response = await client.post(
                        self.settings.api_url, headers=self._headers(), json=payload
                    )
        except httpx.HTTPError as e:
            raise RetryableSummaryError(f"API request failed: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"API error {response.status_code}: {message}")
            raise RetryableSummaryError(message)

        return response.json()

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.settings.model,
            "prompt": prompt,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "top_p": TOP_P,
            "top_k": TOP_K,
            "repetition_penalty": REPETITION_PENALTY,
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "API request failed"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "API request failed"
