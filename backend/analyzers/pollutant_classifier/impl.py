"""
Pollutant Classifier - Implementation

Pure lookups from a numeric reading (or an aggregate AQI) to a severity label.
Boundaries are inclusive: a reading equal to a cut point belongs to the
better band.
"""

import logging
from typing import Mapping, Optional, Sequence

from .definition import (
    AQI_BANDS,
    AQI_HAZARDOUS,
    AQI_NO_DATA,
    POLLUTANT_THRESHOLDS,
    POLLUTANT_UNITS,
    AqiBand,
    AqiStatus,
    Measurement,
    PollutantStatus,
    PollutantThreshold,
)

logger = logging.getLogger(__name__)


def classify_pollutant(
    kind: str,
    value: float,
    thresholds: Mapping[str, PollutantThreshold] = POLLUTANT_THRESHOLDS,
) -> PollutantStatus:
    """
    Map a pollutant reading to good / moderate / poor.

    Args:
        kind: Pollutant kind (pm25, pm10, no2, so2, co).
        value: Reading in the kind's native unit.
        thresholds: Optional override of the threshold table.

    Returns:
        PollutantStatus.UNKNOWN for kinds with no threshold entry.
    """
    # Enum members hash by name, so look up by the raw string value
    threshold = thresholds.get(getattr(kind, "value", kind))
    if threshold is None:
        logger.debug(f"No thresholds for pollutant '{kind}'")
        return PollutantStatus.UNKNOWN

    if value <= threshold.good:
        return PollutantStatus.GOOD
    if value <= threshold.moderate:
        return PollutantStatus.MODERATE
    return PollutantStatus.POOR


def classify_aqi(
    aqi: Optional[float],
    bands: Sequence[AqiBand] = AQI_BANDS,
) -> AqiStatus:
    """Map an aggregate AQI to its band; None means the station has no data."""
    if aqi is None:
        return AQI_NO_DATA

    for band in bands:
        if aqi <= band.upper:
            return AqiStatus(status=band.status, label=band.label)
    return AQI_HAZARDOUS


def build_measurement(kind: str, value: float, time=None) -> Measurement:
    """Create a Measurement with the unit fixed by the pollutant kind."""
    kind = getattr(kind, "value", kind)
    return Measurement(
        kind=kind,
        value=value,
        unit=POLLUTANT_UNITS.get(kind, ""),
        time=time,
    )
