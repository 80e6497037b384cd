"""Tender catalogue and risk analysis endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from analyzers.tender_risk_engine import Tender
from app.api.response_builder import exception_response
from app.core.exceptions import MonitorBaseException
from app.core.logging import get_logger
from app.schemas import (
    TenderAnalysisResponse,
    TenderListResponse,
    TenderResponse,
    TenderRisksResponse,
)
from app.services.container import DependencyContainer, get_container

logger = get_logger(__name__)
router = APIRouter()


async def _analyze(container: DependencyContainer, tender: Tender) -> TenderAnalysisResponse:
    """Local scoring first, then the narrative (AI or local fallback)."""
    now = datetime.now(timezone.utc)
    container.logger.analysis_start(tender.id, tender.title)

    assessment = container.risk_engine.evaluate(tender, now)
    narrative = await container.narrative_generator.narrate(tender, assessment, now)

    container.logger.analysis_end(
        tender.id, assessment.risk_score, assessment.risk_level.value, narrative.source
    )
    return TenderAnalysisResponse(
        analysis=narrative.text,
        details=assessment,
        source=narrative.source,
        error=narrative.error,
    )


@router.get("/tenders", response_model=TenderListResponse)
async def list_tenders(container: DependencyContainer = Depends(get_container)):
    """All tenders with categories and aggregate statistics."""
    repository = container.tender_repository
    try:
        return TenderListResponse(
            tenders=repository.list_tenders(),
            categories=repository.categories,
            statistics=repository.statistics(),
        )
    except MonitorBaseException as e:
        logger.error(f"[TENDERS] Error loading dataset: {e}")
        return exception_response(e)


@router.post("/tenders/analyze", response_model=TenderAnalysisResponse)
async def analyze_submitted_tender(
    tender: Tender,
    container: DependencyContainer = Depends(get_container),
):
    """Analyze a tender sent in the request body (validated by the Tender model)."""
    return await _analyze(container, tender)


@router.get("/tenders/{tender_id}", response_model=TenderResponse)
async def get_tender(tender_id: str, container: DependencyContainer = Depends(get_container)):
    try:
        return TenderResponse(tender=container.tender_repository.get_tender(tender_id))
    except MonitorBaseException as e:
        logger.warning(f"[TENDERS] {e}")
        return exception_response(e)


@router.get("/tenders/{tender_id}/risks", response_model=TenderRisksResponse)
async def get_tender_risks(tender_id: str, container: DependencyContainer = Depends(get_container)):
    """Local rule assessment only, no LLM involved."""
    try:
        tender = container.tender_repository.get_tender(tender_id)
    except MonitorBaseException as e:
        logger.warning(f"[TENDERS] {e}")
        return exception_response(e)

    assessment = container.risk_engine.evaluate(tender, datetime.now(timezone.utc))
    return TenderRisksResponse(tender_id=tender.id, assessment=assessment)


@router.post("/tenders/{tender_id}/analyze", response_model=TenderAnalysisResponse)
async def analyze_tender(tender_id: str, container: DependencyContainer = Depends(get_container)):
    try:
        tender = container.tender_repository.get_tender(tender_id)
    except MonitorBaseException as e:
        logger.warning(f"[TENDERS] {e}")
        return exception_response(e)

    return await _analyze(container, tender)
