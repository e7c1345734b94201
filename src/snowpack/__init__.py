"""Snow surface classification from chronological weather observations."""

from .exceptions import (
    ConfigurationError,
    EmptySeriesError,
    NoApplicableRuleError,
    SnowpackError,
)
from .models import (
    AssessmentResult,
    ConfidenceLevel,
    DerivedConditions,
    SnowpackState,
    SnowpackThresholds,
    SnowSurfaceAssessment,
    SnowType,
    WeatherDataPoint,
    WeatherGranularity,
)
from .services import AnalysisSession, WeatherAnalyzer, analyze_weather

__all__ = [
    "ConfigurationError",
    "EmptySeriesError",
    "NoApplicableRuleError",
    "SnowpackError",
    "AssessmentResult",
    "ConfidenceLevel",
    "DerivedConditions",
    "SnowpackState",
    "SnowpackThresholds",
    "SnowSurfaceAssessment",
    "SnowType",
    "WeatherDataPoint",
    "WeatherGranularity",
    "AnalysisSession",
    "WeatherAnalyzer",
    "analyze_weather",
]
