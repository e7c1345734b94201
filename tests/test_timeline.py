"""Tests for the snow type timeline."""

from snowpack.models.snow import ConfidenceLevel, SnowType
from snowpack.services.timeline_service import build_timeline
from snowpack.services.weather_analyzer import WeatherAnalyzer


class TestBuildTimeline:
    """Test cases for build_timeline."""

    def test_consecutive_types_are_merged(self, melt_refreeze_series):
        analyzer = WeatherAnalyzer(melt_refreeze_series)

        segments = build_timeline(analyzer.assessments)

        assert [s.snow_type for s in segments] == [
            SnowType.VERY_WET_CORN,
            SnowType.FROZEN_CORN,
            SnowType.NEW_FALLEN,
        ]
        new_snow = segments[-1]
        assert new_snow.window_count == 2
        assert new_snow.start == melt_refreeze_series[2].start
        assert new_snow.end == melt_refreeze_series[3].end
        assert new_snow.duration_hours == 2.0
        # HIGH for the snowfall hour, MEDIUM for the hour after
        assert new_snow.lowest_confidence == ConfidenceLevel.MEDIUM

    def test_empty_history(self):
        assert build_timeline([]) == []

    def test_single_segment(self, make_point):
        analyzer = WeatherAnalyzer([make_point(i) for i in range(5)])

        segments = build_timeline(analyzer.assessments)

        assert len(segments) == 1
        assert segments[0].window_count == 5
