"""News analysis endpoint."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ...domain.models.claim import Claim
from ...domain.models.errors import DEFAULT_MESSAGES, ErrorKind, PipelineError
from ...infrastructure.dependencies import ServiceContainer, get_service_container

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _json_response(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


async def _read_claim(request: Request) -> Claim:
    """Parse ``{"text": ...}`` from the request body.

    Raises:
        PipelineError: If the body is not JSON or the text is missing or blank
    """
    try:
        payload = await request.json()
    except ValueError:
        raise PipelineError(ErrorKind.INVALID_INPUT)
    if not isinstance(payload, dict):
        raise PipelineError(ErrorKind.INVALID_INPUT)
    return Claim.from_input(payload.get("text"))


@router.options("/analyze-news")
@router.options("/functions/v1/analyze-news")
async def analyze_news_preflight() -> Response:
    """Answer cross-origin preflight requests."""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post("/analyze-news")
@router.post("/functions/v1/analyze-news")
async def analyze_news(
    request: Request,
    container: ServiceContainer = Depends(get_service_container),
) -> JSONResponse:
    """Return a credibility verdict for the submitted text.

    Args:
        request: Request with a JSON body ``{"text": "<claim>"}``
        container: Service container

    Returns:
        Canonical verdict, or ``{"error": message}`` with status 400 or 500
    """
    try:
        claim = await _read_claim(request)
        logger.info(f"User input: {claim.preview()}")

        service = await container.get_fact_checking_service()
        result = await service.analyze(claim)
        return _json_response(200, result.to_dict())

    except PipelineError as e:
        logger.warning(f"Analysis failed: {e.kind.value}: {e.message}")
        return _json_response(e.status_code, {"error": e.message})

    except Exception as e:
        logger.error(f"Error in analyze-news: {type(e).__name__}: {e}", exc_info=True)
        return _json_response(500, {"error": DEFAULT_MESSAGES[ErrorKind.UPSTREAM_FAILURE]})
