import streamlit as st
import httpx
import logging
import os
from dotenv import load_dotenv
import asyncio
from typing import Optional, List

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Configuration ---
load_dotenv() # Load .env file if present
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_ENDPOINT = f"{API_BASE_URL}/api/v1/digests"
TOTAL_ATTEMPTS = 3

api_key_present = bool(os.getenv("TOGETHER_API_KEY"))

# --- Streamlit App ---
st.set_page_config(page_title="Page Digest", layout="centered")
st.title("Article Summary")

if not api_key_present:
    st.warning("Warning: TOGETHER_API_KEY environment variable not found. The backend might not be able to summarize.")

# --- Helper Function to Call API ---
async def call_digest_api(url: str) -> List[str]:
    """Returns the summary points, raising RuntimeError with a user-facing message on failure."""
    logger.info(f"Calling API endpoint: {API_ENDPOINT} for url: {url}")
    try:
        # Three attempts with 2s pauses can take a while
        async with httpx.AsyncClient(timeout=300.0) as client:
            response = await client.post(API_ENDPOINT, json={"url": url})
    except httpx.RequestError as e:
        logger.error(f"API Request Error: {e}")
        raise RuntimeError(f"Could not connect to the backend at {API_ENDPOINT}. Details: {e}") from e

    if response.is_error:
        logger.error(f"API HTTP Status Error: {response.status_code}, Response: {response.text}")
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        raise RuntimeError(detail if isinstance(detail, str) else f"Request failed with status {response.status_code}")

    return response.json()["points"]

def render_points(points: List[str]) -> None:
    for index, point in enumerate(points, start=1):
        st.markdown(f"**{index}.** {point}")

# --- UI Rendering ---

page_url: Optional[str] = st.text_input("Article URL:", key="url_input")

if st.button("Summarize", key="summarize_button", disabled=not page_url):
    with st.spinner(f"Analyzing with AI... (up to {TOTAL_ATTEMPTS} attempts)"):
        try:
            summary_points = asyncio.run(call_digest_api(page_url))
        except RuntimeError as e:
            summary_points = None
            st.error(str(e))
    if summary_points:
        render_points(summary_points)
