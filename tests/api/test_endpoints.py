import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch, AsyncMock, MagicMock
import os
import sys
from typing import Any, Dict

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from page_digest.main import app
from page_digest.orchestration.state import DigestState

BASE_URL = "http://test"
API_ENDPOINT = "/api/v1/digests"

POINTS = ["Point one", "Point two", "Point three", "Point four", "Point five"]

# --- Helpers ---

def mock_graph(final_state: Dict[str, Any]) -> MagicMock:
    """Creates a stand-in for the compiled graph returning the given final state."""
    graph = MagicMock()
    graph.ainvoke = AsyncMock(return_value=final_state)
    return graph

# --- Test Fixtures ---

@pytest_asyncio.fixture(scope="function")
async def async_client() -> AsyncClient:
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client

# --- Test Cases ---

@pytest.mark.asyncio
async def test_create_digest_success(async_client: AsyncClient):
    final_state = DigestState(url="https://news.test/a", content="Body", points=POINTS).model_dump()

    with patch("page_digest.api.endpoints.digest_graph", mock_graph(final_state)) as graph:
        response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a"})

    assert response.status_code == 200
    assert response.json() == {"points": POINTS, "url": "https://news.test/a"}

    graph.ainvoke.assert_awaited_once()
    invoked_state = graph.ainvoke.call_args.args[0]
    assert isinstance(invoked_state, DigestState)
    assert invoked_state.url == "https://news.test/a"
    assert invoked_state.max_retries == 2

@pytest.mark.asyncio
async def test_create_digest_with_html_and_retry_budget(async_client: AsyncClient):
    final_state = DigestState(content="Body", points=POINTS).model_dump()

    with patch("page_digest.api.endpoints.digest_graph", mock_graph(final_state)) as graph:
        response = await async_client.post(
            API_ENDPOINT, json={"html": "<article>Body</article>", "max_retries": 0}
        )

    assert response.status_code == 200
    assert response.json()["points"] == POINTS
    invoked_state = graph.ainvoke.call_args.args[0]
    assert invoked_state.html == "<article>Body</article>"
    assert invoked_state.max_retries == 0

@pytest.mark.asyncio
async def test_create_digest_requires_url_or_html(async_client: AsyncClient):
    with patch("page_digest.api.endpoints.digest_graph", mock_graph({})) as graph:
        response = await async_client.post(API_ENDPOINT, json={})

    assert response.status_code == 400
    graph.ainvoke.assert_not_awaited()

@pytest.mark.asyncio
async def test_create_digest_rejects_negative_retries(async_client: AsyncClient):
    response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a", "max_retries": -1})
    assert response.status_code == 422

@pytest.mark.asyncio
async def test_create_digest_no_content(async_client: AsyncClient):
    final_state = DigestState(
        url="https://news.test/a",
        error_message="Could not find article content on this page",
        failed_stage="extract",
    ).model_dump()

    with patch("page_digest.api.endpoints.digest_graph", mock_graph(final_state)):
        response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Could not find article content on this page"

@pytest.mark.asyncio
async def test_create_digest_summary_failure(async_client: AsyncClient):
    final_state = DigestState(
        url="https://news.test/a",
        content="Body",
        error_message="Could not generate proper summary",
        failed_stage="summarize",
    ).model_dump()

    with patch("page_digest.api.endpoints.digest_graph", mock_graph(final_state)):
        response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Could not generate proper summary"

@pytest.mark.asyncio
async def test_create_digest_never_returns_partial_points(async_client: AsyncClient):
    final_state = DigestState(content="Body", points=POINTS[:3]).model_dump()

    with patch("page_digest.api.endpoints.digest_graph", mock_graph(final_state)):
        response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a"})

    assert response.status_code == 500
    assert "points" not in response.json()

@pytest.mark.asyncio
async def test_create_digest_unhandled_graph_error(async_client: AsyncClient):
    graph = MagicMock()
    graph.ainvoke = AsyncMock(side_effect=RuntimeError("graph exploded"))

    with patch("page_digest.api.endpoints.digest_graph", graph):
        response = await async_client.post(API_ENDPOINT, json={"url": "https://news.test/a"})

    assert response.status_code == 500
    assert "graph exploded" in response.json()["detail"]
