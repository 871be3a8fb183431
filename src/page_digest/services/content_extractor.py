import logging
from typing import Callable, List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 200

ARTICLE_BODY_SELECTORS = [
    'div[itemprop="articleBody"]',
    'div[class*="article-body"]',
    'div[class*="story-body"]',
    'section[class*="article"]',
    'div[data-testid^="paragraph-"]',
    'div[class*="post-content"]',
]

BOILERPLATE_CONTAINERS = ["header", "footer", "nav", "aside"]
NON_TEXT_TAGS = ["script", "style", "noscript", "template"]
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table",
    "td", "th", "tr", "ul",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class ContentNotFoundError(Exception):
    """No article content could be extracted from the page."""

    def __init__(self, message: str = "Could not find article content on this page"):
        super().__init__(message)


class ContentFetchError(Exception):
    """The page could not be downloaded."""
    pass


# --- Extraction strategies ---

def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _mark_block_boundaries(soup: BeautifulSoup) -> None:
    """Surrounds block elements with newlines so inline runs stay on one line."""
    for tag in soup.find_all(BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")


def _text_of(element) -> str:
    """Text of an element, one line per block, inline runs joined by spaces."""
    lines = (_collapse_whitespace(line) for line in element.get_text().split("\n"))
    return "\n".join(line for line in lines if line)


def _article_tag_text(soup: BeautifulSoup) -> str:
    article = soup.find("article")
    return _text_of(article) if article else ""


def _article_selector_text(soup: BeautifulSoup) -> str:
    """Longest text among the first match of each known article-body selector."""
    best_text = ""
    for selector in ARTICLE_BODY_SELECTORS:
        element = soup.select_one(selector)
        if element:
            text = _text_of(element)
            if len(text) > len(best_text):
                best_text = text
    return best_text


def _paragraph_text(soup: BeautifulSoup) -> str:
    paragraphs = [
        _collapse_whitespace(p.get_text())
        for p in soup.find_all("p")
        if p.find_parent(BOILERPLATE_CONTAINERS) is None
    ]
    return "\n\n".join(p for p in paragraphs if p)


# The <article> tag must exceed the threshold; a selector match may equal it
EXTRACTION_STRATEGIES: List[Tuple[Callable[[BeautifulSoup], str], Callable[[str], bool]]] = [
    (_article_tag_text, lambda text: len(text) > MIN_CONTENT_LENGTH),
    (_article_selector_text, lambda text: len(text) >= MIN_CONTENT_LENGTH),
]
FALLBACK_STRATEGY: Callable[[BeautifulSoup], str] = _paragraph_text


def extract_main_content(html: str) -> str:
    """Returns the best-effort main text of an HTML page, or "" if nothing is found.

    Strategies run in order and the first one whose text is long enough wins.
    The paragraph fallback is returned as is.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(NON_TEXT_TAGS):
        tag.decompose()
    _mark_block_boundaries(soup)

    for strategy, is_long_enough in EXTRACTION_STRATEGIES:
        content = strategy(soup)
        if is_long_enough(content):
            logger.info(f"Content extracted by {strategy.__name__} ({len(content)} chars)")
            return content

    content = FALLBACK_STRATEGY(soup)
    logger.info(f"Content extracted by paragraph fallback ({len(content)} chars)")
    return content


class ContentExtractor:
    """Resolves a page (URL or already-captured HTML) to its article text."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, timeout: float = 20.0):
        self._http_client = http_client
        self.timeout = timeout

    async def extract(self, url: Optional[str] = None, html: Optional[str] = None) -> str:
        """Returns the page text; empty when no heuristic matched.

        Raises:
            ValueError: If neither url nor html is given.
            ContentFetchError: If the URL could not be fetched.
        """
        if html is None:
            if not url:
                raise ValueError("Either url or html must be provided.")
            html = await self.fetch(url)
        return extract_main_content(html)

    async def fetch(self, url: str) -> str:
        logger.info(f"Fetching page: {url}")
        headers = {"User-Agent": DEFAULT_USER_AGENT}
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=headers, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Page fetch returned status {e.response.status_code}: {url}")
            raise ContentFetchError(f"Could not load page (status {e.response.status_code})") from e
        except httpx.RequestError as e:
            logger.error(f"Page fetch failed for {url}: {e}")
            raise ContentFetchError(f"Could not load page: {e}") from e
        return response.text
