"""
Pollutant Classifier

Threshold-based status classification for pollutant readings and AQI values.
"""

from .definition import (
    AQI_BANDS,
    AQI_NO_DATA,
    POLLUTANT_THRESHOLDS,
    POLLUTANT_UNITS,
    AqiBand,
    AqiCategory,
    AqiStatus,
    Measurement,
    PollutantKind,
    PollutantStatus,
    PollutantThreshold,
)

from .impl import (
    build_measurement,
    classify_aqi,
    classify_pollutant,
)

__all__ = [
    # Functions
    "build_measurement",
    "classify_aqi",
    "classify_pollutant",
    # Models
    "AqiBand",
    "AqiCategory",
    "AqiStatus",
    "Measurement",
    "PollutantKind",
    "PollutantStatus",
    "PollutantThreshold",
    # Constants
    "AQI_BANDS",
    "AQI_NO_DATA",
    "POLLUTANT_THRESHOLDS",
    "POLLUTANT_UNITS",
]
