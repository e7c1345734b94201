"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from snowpack.models.snowpack import SnowpackState, SnowpackThresholds
from snowpack.models.weather import WeatherDataPoint
from snowpack.utils.cache import clear_analysis_cache

BASE_TIME = datetime(2026, 1, 20, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_analysis_cache():
    """Ensure each test starts with an empty analysis cache."""
    clear_analysis_cache()
    yield
    clear_analysis_cache()


@pytest.fixture
def default_thresholds():
    """Production default thresholds."""
    return SnowpackThresholds.defaults()


@pytest.fixture
def initial_state():
    """Fresh zero state."""
    return SnowpackState.initial()


@pytest.fixture
def make_point():
    """Factory for weather data points laid out on consecutive windows."""

    def _make_point(
        index: int = 0,
        snowfall_cm: float = 0.0,
        min_temp_c: float = -8.0,
        max_temp_c: float = -3.0,
        humidity: float = 0.5,
        rainfall_mm: float = 0.0,
        window_hours: int = 1,
    ) -> WeatherDataPoint:
        start = BASE_TIME + timedelta(hours=index * window_hours)
        return WeatherDataPoint(
            start=start,
            end=start + timedelta(hours=window_hours),
            snowfall_cm=snowfall_cm,
            rainfall_mm=rainfall_mm,
            min_temp_c=min_temp_c,
            max_temp_c=max_temp_c,
            humidity=humidity,
        )

    return _make_point


@pytest.fixture
def melt_refreeze_series(make_point):
    """Warm hour, a refreeze, significant snow on top, then a cold hour."""
    return [
        make_point(0, min_temp_c=1.0, max_temp_c=3.0, humidity=0.9),
        make_point(1, min_temp_c=-5.0, max_temp_c=-2.0),
        make_point(2, snowfall_cm=3.0, min_temp_c=-6.0, max_temp_c=-4.0),
        make_point(3, min_temp_c=-6.0, max_temp_c=-4.0),
    ]
