import pytest
import os
from dotenv import load_dotenv

# Ensure the src directory is in the path for imports
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from page_digest.config import Settings
from page_digest.services.summary_client import SummaryClient

# Load environment variables (especially TOGETHER_API_KEY for the test)
load_dotenv()

requires_api_key = pytest.mark.skipif(
    not os.getenv("TOGETHER_API_KEY"),
    reason="Requires TOGETHER_API_KEY environment variable to be set"
)

ARTICLE = """
The city council approved a 40 million dollar plan on Tuesday to extend the tram network by 12 kilometres.
Construction of the two new lines is scheduled to begin next spring and finish by 2029.
The mayor said the extension would connect the university campus and the northern industrial park.
Opposition members criticised the cost and asked for an independent audit of the budget.
Local businesses along the planned route will receive compensation during the construction period.
Transport officials expect ridership to grow by 25 percent once the lines open.
"""

@requires_api_key
@pytest.mark.asyncio
async def test_summarize_real_article():
    """Calls the real completion endpoint and checks the shape of the result."""
    client = SummaryClient(settings=Settings.from_env())

    points = await client.summarize(ARTICLE)

    print(f"\n[Integration Test] Summary points: {points}")
    assert len(points) == 5
    assert all(isinstance(point, str) and point for point in points)
