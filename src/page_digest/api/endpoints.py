from fastapi import APIRouter, HTTPException, Body, status
import logging

from pydantic import ValidationError

from .models import DigestRequest, DigestResponse
from ..orchestration.state import DigestState
from ..orchestration.graph_definition import digest_graph

router = APIRouter()
logger = logging.getLogger(__name__)

# HTTP status reported for a failure in each workflow stage
STAGE_ERROR_STATUS = {
    "extract": 422, # Unprocessable content
    "summarize": status.HTTP_502_BAD_GATEWAY,
}

@router.post(
    "",
    response_model=DigestResponse,
    summary="Summarize a web page into five factual points",
    description="Extracts the main article text of the page and asks the completion model for a 5-point summary."
)
async def create_digest(payload: DigestRequest = Body(...)):
    if not payload.url and payload.html is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either 'url' or 'html' must be provided."
        )

    logger.info(f"Processing digest request. url={payload.url!r}, html supplied={payload.html is not None}")

    try:
        initial_state = DigestState(url=payload.url, html=payload.html, max_retries=payload.max_retries)
        final_state_dict = await digest_graph.ainvoke(initial_state)
    except Exception as e:
        logger.exception(f"Unhandled error processing digest: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error processing digest: {e}"
        )

    try:
        final_state = DigestState(**final_state_dict)
    except ValidationError as e:
        logger.error(f"Digest graph returned invalid state: {final_state_dict}. Error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Digest graph returned invalid state structure: {e}"
        )

    if final_state.error_message:
        status_code = STAGE_ERROR_STATUS.get(final_state.failed_stage, status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.warning(f"Digest failed at stage '{final_state.failed_stage}': {final_state.error_message}")
        raise HTTPException(status_code=status_code, detail=final_state.error_message)

    try:
        response = DigestResponse(points=final_state.points, url=payload.url)
    except ValidationError as e:
        logger.error(f"Digest finished without a complete summary: {final_state.points}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Digest finished without a complete summary: {e}"
        )

    logger.info("Digest completed with summary points.")
    return response
