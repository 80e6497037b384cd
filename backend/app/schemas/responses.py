from datetime import datetime
from typing import Literal

from app.schemas.air_quality import CamelModel, CityAirQuality, StationDetails, StationHistory, StationList


class ErrorResponse(CamelModel):
    success: Literal[False] = False
    error: str


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: datetime
    service: str
    env: str
    ai_enabled: bool


class AirQualityResponse(CityAirQuality):
    success: bool = True


class StationsResponse(StationList):
    success: bool = True


class StationDetailsResponse(CamelModel):
    success: bool = True
    station: StationDetails


class StationHistoryResponse(StationHistory):
    success: bool = True


class AskResponse(CamelModel):
    success: bool = True
    answer: str


class AnalyzeAirQualityResponse(CamelModel):
    success: bool = True
    analysis: str
