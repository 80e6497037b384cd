"""
Pollutant Classifier - Data Definitions

Threshold tables and pydantic models for air-quality classification.
All tables are read-only; the classifier never mutates them.
"""

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PollutantKind(str, Enum):
    """Pollutants reported by the monitoring stations."""
    PM25 = "pm25"
    PM10 = "pm10"
    NO2 = "no2"
    SO2 = "so2"
    CO = "co"


class PollutantStatus(str, Enum):
    """Severity of a single pollutant reading."""
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"
    UNKNOWN = "unknown"


class AqiCategory(str, Enum):
    """Standard six-band AQI categories plus the no-data case."""
    GOOD = "good"
    MODERATE = "moderate"
    UNHEALTHY_SENSITIVE = "unhealthy-sensitive"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very-unhealthy"
    HAZARDOUS = "hazardous"
    UNKNOWN = "unknown"


class PollutantThreshold(BaseModel):
    """Two-tier cut points: `<= good` is good, `<= moderate` is moderate."""

    model_config = ConfigDict(frozen=True)

    good: float = Field(..., ge=0)
    moderate: float = Field(..., ge=0)


class AqiBand(BaseModel):
    """Upper (inclusive) bound of an AQI band with its label."""

    model_config = ConfigDict(frozen=True)

    upper: float
    status: AqiCategory
    label: str


class AqiStatus(BaseModel):
    """Classification of an aggregate AQI value."""

    model_config = ConfigDict(frozen=True)

    status: AqiCategory
    label: str


# WHO / EPA based cut points. Gases and particulates in µg/m³, CO in mg/m³.
POLLUTANT_THRESHOLDS: Mapping[str, PollutantThreshold] = MappingProxyType({
    PollutantKind.PM25.value: PollutantThreshold(good=15, moderate=35),
    PollutantKind.PM10.value: PollutantThreshold(good=45, moderate=75),
    PollutantKind.NO2.value: PollutantThreshold(good=40, moderate=100),
    PollutantKind.SO2.value: PollutantThreshold(good=20, moderate=80),
    PollutantKind.CO.value: PollutantThreshold(good=4, moderate=10),
})

POLLUTANT_UNITS: Mapping[str, str] = MappingProxyType({
    PollutantKind.PM25.value: "µg/m³",
    PollutantKind.PM10.value: "µg/m³",
    PollutantKind.NO2.value: "µg/m³",
    PollutantKind.SO2.value: "µg/m³",
    PollutantKind.CO.value: "mg/m³",
})

AQI_BANDS: Tuple[AqiBand, ...] = (
    AqiBand(upper=50, status=AqiCategory.GOOD, label="Хорошее"),
    AqiBand(upper=100, status=AqiCategory.MODERATE, label="Умеренное"),
    AqiBand(upper=150, status=AqiCategory.UNHEALTHY_SENSITIVE, label="Вредно для чувствительных"),
    AqiBand(upper=200, status=AqiCategory.UNHEALTHY, label="Вредно"),
    AqiBand(upper=300, status=AqiCategory.VERY_UNHEALTHY, label="Очень вредно"),
)

AQI_HAZARDOUS = AqiStatus(status=AqiCategory.HAZARDOUS, label="Опасно")
AQI_NO_DATA = AqiStatus(status=AqiCategory.UNKNOWN, label="Нет данных")


class Measurement(BaseModel):
    """
    Latest reading of one pollutant at a station.

    `status` is derived from the threshold tables every time it is read,
    so it always agrees with the current `value`.
    """

    kind: str = Field(..., description="Pollutant kind: pm25, pm10, no2, so2, co.")
    value: float = Field(..., description="Reading in the kind's native unit.")
    unit: str = Field(..., description="µg/m³ for particulates and gases, mg/m³ for CO.")
    time: Optional[datetime] = Field(default=None, description="Timestamp of the reading.")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> PollutantStatus:
        from .impl import classify_pollutant

        return classify_pollutant(self.kind, self.value)
