"""Air quality assistant endpoints."""

from fastapi import APIRouter, Depends, status

from app.api.response_builder import error_response, exception_response
from app.core.exceptions import LLMInvocationError
from app.core.logging import get_logger
from app.schemas import (
    AnalyzeAirQualityRequest,
    AnalyzeAirQualityResponse,
    AskRequest,
    AskResponse,
)
from app.services.container import DependencyContainer, get_container

logger = get_logger(__name__)
router = APIRouter()


@router.post("/ai/ask", response_model=AskResponse)
async def ask(request: AskRequest, container: DependencyContainer = Depends(get_container)):
    """Answer a free-form question, optionally grounded in a client-side snapshot."""
    question = (request.question or "").strip()
    if not question:
        return error_response(status.HTTP_400_BAD_REQUEST, "Question is required")

    try:
        answer = await container.advisor.ask(question, request.air_quality_data)
    except LLMInvocationError as e:
        logger.error(f"[AI] Error in /ai/ask: {e}")
        return exception_response(e)
    return AskResponse(answer=answer)


@router.post("/ai/analyze", response_model=AnalyzeAirQualityResponse)
async def analyze(
    request: AnalyzeAirQualityRequest,
    container: DependencyContainer = Depends(get_container),
):
    try:
        analysis = await container.advisor.analyze(request.air_quality_data)
    except LLMInvocationError as e:
        logger.error(f"[AI] Error in /ai/analyze: {e}")
        return exception_response(e)
    return AnalyzeAirQualityResponse(analysis=analysis)
