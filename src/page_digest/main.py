from fastapi import FastAPI
from .api import endpoints as digest_endpoints
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Page Digest API",
    version="0.1.0",
    description="Five-point factual summaries of web articles."
    )

@app.get("/health", tags=["Infrastructure"])
async def health_check():
    """Check if the application is running."""
    logger.info("Health check endpoint called.")
    return {"status": "OK"}

app.include_router(
    digest_endpoints.router,
    prefix="/api/v1/digests",
    tags=["Digests"]
    )

logger.info("FastAPI application configured and routers included.")
