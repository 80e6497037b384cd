from typing import Any, Optional

from pydantic import Field

from app.schemas.air_quality import CamelModel


class AskRequest(CamelModel):
    # Emptiness is checked in the route so the client gets a 400 with a message
    question: Optional[str] = Field(default=None, max_length=2000)
    air_quality_data: Optional[Any] = None


class AnalyzeAirQualityRequest(CamelModel):
    air_quality_data: Optional[Any] = None
