"""Services for snow surface classification."""

from .analysis_session import AnalysisSession, analyze_batch
from .classification_rules import (
    DEFAULT_CLASSIFICATION_RULES,
    SnowClassificationRule,
    classify,
)
from .reason_explanation_service import explain_reason
from .series_builder import points_from_daily_history, points_from_hourly_forecast
from .state_transitions import (
    DEFAULT_STATE_TRANSITIONS,
    SnowpackStateTransition,
    apply_transitions,
)
from .timeline_service import build_timeline
from .weather_analyzer import WeatherAnalyzer, analyze_weather

__all__ = [
    "AnalysisSession",
    "analyze_batch",
    "DEFAULT_CLASSIFICATION_RULES",
    "SnowClassificationRule",
    "classify",
    "explain_reason",
    "points_from_daily_history",
    "points_from_hourly_forecast",
    "DEFAULT_STATE_TRANSITIONS",
    "SnowpackStateTransition",
    "apply_transitions",
    "build_timeline",
    "WeatherAnalyzer",
    "analyze_weather",
]
