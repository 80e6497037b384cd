from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from analyzers.pollutant_classifier import AqiStatus, Measurement


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class Station(CamelModel):
    """Monitoring station as listed by the map-bounds endpoint."""
    id: str = Field(description="Station id without the 'A' prefix")
    idx: str = Field(description="Upstream identifier as received")
    name: str
    aqi: Optional[int] = Field(default=None, description="Current AQI, None when upstream reports '-'")
    has_data: bool
    last_update: Optional[str] = None
    coordinates: Coordinates


class StationList(CamelModel):
    stations: list[Station] = Field(default_factory=list)
    total_count: int = 0
    with_data: int = 0


class Attribution(CamelModel):
    name: Optional[str] = None
    url: Optional[str] = None


class StationDetails(CamelModel):
    """Latest pollutant values for one station."""
    id: str
    name: str
    coordinates: Coordinates
    last_update: Optional[datetime] = None
    attribution: Attribution
    pollutants: dict[str, Measurement] = Field(default_factory=dict)
    raw_feed: Optional[Any] = None


class StationSnapshot(Station):
    """Station enriched with its AQI band and (optional) details."""
    aqi_status: AqiStatus
    details: Optional[StationDetails] = None


class StationCounts(CamelModel):
    total: int
    with_data: int
    without_data: int


class CityAirQuality(CamelModel):
    """City-wide snapshot: every station plus the average AQI."""
    city: str
    average_aqi: Optional[int] = None
    average_aqi_status: AqiStatus
    stations: list[StationSnapshot] = Field(default_factory=list)
    summary: StationCounts
    last_update: datetime


class HistoryPoint(CamelModel):
    time: str
    value: Optional[float] = None


class StationHistory(CamelModel):
    station_id: str
    history: dict[str, list[HistoryPoint]] = Field(default_factory=dict)
    period: str
