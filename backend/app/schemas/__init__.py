from app.schemas.air_quality import (
    CityAirQuality,
    Station,
    StationDetails,
    StationHistory,
    StationList,
    StationSnapshot,
)
from app.schemas.requests import AnalyzeAirQualityRequest, AskRequest
from app.schemas.responses import (
    AirQualityResponse,
    AnalyzeAirQualityResponse,
    AskResponse,
    ErrorResponse,
    HealthResponse,
    StationDetailsResponse,
    StationHistoryResponse,
    StationsResponse,
)
from app.schemas.tenders import (
    TenderAnalysisResponse,
    TenderListResponse,
    TenderResponse,
    TenderRisksResponse,
)

__all__ = [
    "AirQualityResponse",
    "AnalyzeAirQualityRequest",
    "AnalyzeAirQualityResponse",
    "AskRequest",
    "AskResponse",
    "CityAirQuality",
    "ErrorResponse",
    "HealthResponse",
    "Station",
    "StationDetails",
    "StationDetailsResponse",
    "StationHistory",
    "StationHistoryResponse",
    "StationList",
    "StationSnapshot",
    "StationsResponse",
    "TenderAnalysisResponse",
    "TenderListResponse",
    "TenderResponse",
    "TenderRisksResponse",
]
