"""Tests for the reason explanation service."""

from snowpack.models.snow import AssessmentResult, ConfidenceLevel, SnowType
from snowpack.services.reason_explanation_service import (
    REASON_TEMPLATES,
    explain_reason,
)
from snowpack.services.weather_analyzer import WeatherAnalyzer


def _result(reason_key: str, **params) -> AssessmentResult:
    return AssessmentResult(
        snow_type=SnowType.NEW_FALLEN,
        confidence=ConfidenceLevel.HIGH,
        reason_key=reason_key,
        reason_params=params,
    )


class TestExplainReason:
    def test_new_snow(self):
        explanation = explain_reason(_result("snow_reason_new_snow", snowfall="5.0"))
        assert explanation == "New snow: 5.0cm fell in this period."

    def test_refrozen(self):
        explanation = explain_reason(
            _result("snow_reason_refrozen", hours_since_melt="6", avg_temp="-8.0")
        )
        assert "6 hours ago" in explanation
        assert "-8.0°C" in explanation

    def test_unknown_key_falls_back_to_key(self):
        assert explain_reason(_result("custom_reason")) == "custom_reason"

    def test_missing_params_render_placeholder(self):
        explanation = explain_reason(_result("snow_reason_new_snow"))
        assert explanation == "New snow: ?cm fell in this period."

    def test_accepts_assessments(self, melt_refreeze_series):
        analyzer = WeatherAnalyzer(melt_refreeze_series)
        explanation = explain_reason(analyzer.assessments[0])
        assert "3.0°C" in explanation

    def test_every_default_reason_has_template(self, make_point):
        """All reason keys produced across a varied series are templated."""
        temps = [(-20, -10), (-8, -3), (-4, 0), (-2, 1), (0, 4), (-5, -2)]
        points = []
        for i, (low, high) in enumerate(temps * 20):
            snowfall = 3.0 if i % 17 == 0 else (1.0 if i % 5 == 0 else 0.0)
            points.append(
                make_point(
                    i,
                    snowfall_cm=snowfall,
                    min_temp_c=low,
                    max_temp_c=high,
                    humidity=0.9 if i % 2 else 0.4,
                )
            )

        analyzer = WeatherAnalyzer(points)

        for assessment in analyzer.assessments:
            assert assessment.result.reason_key in REASON_TEMPLATES
