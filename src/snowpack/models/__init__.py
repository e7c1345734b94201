"""Data models for snow surface classification."""

from .snow import (
    AssessmentResult,
    ConfidenceLevel,
    SnowGroup,
    SnowSurfaceAssessment,
    SnowType,
    SnowTypeSegment,
)
from .snowpack import DerivedConditions, SnowpackState, SnowpackThresholds
from .weather import (
    DailyHistorySummary,
    HourlyForecastEntry,
    PrecipitationType,
    WeatherDataPoint,
    WeatherGranularity,
)

__all__ = [
    "AssessmentResult",
    "ConfidenceLevel",
    "SnowGroup",
    "SnowSurfaceAssessment",
    "SnowType",
    "SnowTypeSegment",
    "DerivedConditions",
    "SnowpackState",
    "SnowpackThresholds",
    "DailyHistorySummary",
    "HourlyForecastEntry",
    "PrecipitationType",
    "WeatherDataPoint",
    "WeatherGranularity",
]
