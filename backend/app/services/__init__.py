from app.services.air_quality import AirQualityService
from app.services.air_quality_advisor import AirQualityAdvisor
from app.services.container import get_container, reset_container
from app.services.llm_factory import get_llm
from app.services.narrative import NarrativeGenerator, NarrativeResult
from app.services.tender_repository import TenderRepository

__all__ = [
    "AirQualityAdvisor",
    "AirQualityService",
    "NarrativeGenerator",
    "NarrativeResult",
    "TenderRepository",
    "get_container",
    "get_llm",
    "reset_container",
]
