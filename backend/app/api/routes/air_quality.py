"""Air quality endpoints backed by the WAQI public API."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.response_builder import exception_response
from app.core.exceptions import MonitorBaseException, NotFoundError
from app.core.logging import get_logger
from app.schemas import (
    AirQualityResponse,
    HealthResponse,
    StationDetailsResponse,
    StationHistoryResponse,
    StationsResponse,
)
from app.services.container import DependencyContainer, get_container

logger = get_logger(__name__)
router = APIRouter()

SERVICE_NAME = "Air Quality API"


def build_health(container: DependencyContainer) -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        service=SERVICE_NAME,
        env=container.settings.app_env,
        ai_enabled=container.narrative_generator.ai_enabled,
    )


@router.get("/health", response_model=HealthResponse)
async def health(container: DependencyContainer = Depends(get_container)):
    return build_health(container)


@router.get("/air-quality", response_model=AirQualityResponse)
async def air_quality(
    bounds: Optional[str] = None,
    container: DependencyContainer = Depends(get_container),
):
    """City snapshot: every station in bounds, details for stations with data, average AQI."""
    try:
        snapshot = await container.air_quality_service.get_all_air_quality(bounds)
    except MonitorBaseException as e:
        logger.error(f"[AIR] Error in /air-quality: {e}")
        return exception_response(e)
    return AirQualityResponse(**dict(snapshot))


@router.get("/stations", response_model=StationsResponse)
async def stations(
    bounds: Optional[str] = None,
    container: DependencyContainer = Depends(get_container),
):
    try:
        station_list = await container.air_quality_service.get_stations_in_bounds(bounds)
    except MonitorBaseException as e:
        logger.error(f"[AIR] Error in /stations: {e}")
        return exception_response(e)
    return StationsResponse(**dict(station_list))


@router.get("/station/{station_id}", response_model=StationDetailsResponse)
async def station_details(station_id: str, container: DependencyContainer = Depends(get_container)):
    try:
        details = await container.air_quality_service.get_station_details(station_id)
    except NotFoundError as e:
        logger.warning(f"[AIR] {e}")
        return exception_response(e)
    except MonitorBaseException as e:
        logger.error(f"[AIR] Error in /station/{station_id}: {e}")
        return exception_response(e)
    return StationDetailsResponse(station=details)


@router.get("/station/{station_id}/history", response_model=StationHistoryResponse)
async def station_history(
    station_id: str,
    hours: int = Query(default=24, ge=1, le=24 * 30),
    container: DependencyContainer = Depends(get_container),
):
    """Per-pollutant series for charts."""
    try:
        history = await container.air_quality_service.get_station_history(station_id, hours)
    except MonitorBaseException as e:
        logger.error(f"[AIR] Error in /station/{station_id}/history: {e}")
        return exception_response(e)
    return StationHistoryResponse(**dict(history))
