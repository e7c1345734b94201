"""Build chronological weather series from provider summaries.

Weather providers report past days newest first and do not always split
precipitation by type. These helpers normalize both into the chronological
``WeatherDataPoint`` series the analyzer expects. Precipitation amounts are
water equivalent; snowfall is snow depth in cm.
"""

import logging
from datetime import timedelta
from typing import Iterable

from snowpack.models.weather import (
    DailyHistorySummary,
    HourlyForecastEntry,
    PrecipitationType,
    WeatherDataPoint,
)
from snowpack.utils.constants import (
    HOURS_PER_DAY,
    MIXED_PRECIPITATION_SNOW_FRACTION,
    SNOW_CM_PER_MM_WATER,
)

logger = logging.getLogger(__name__)


def estimate_snow_from_precip(
    total_mm: float | None, precipitation: PrecipitationType | None
) -> float | None:
    """Estimate snowfall (cm) from total precipitation when no amount is reported.

    Returns:
        Estimated snowfall in cm, or None if nothing can be inferred
    """
    if total_mm is None or total_mm <= 0:
        return None
    if precipitation == PrecipitationType.SNOW:
        return total_mm * SNOW_CM_PER_MM_WATER
    if precipitation == PrecipitationType.MIXED:
        return total_mm * MIXED_PRECIPITATION_SNOW_FRACTION * SNOW_CM_PER_MM_WATER
    return None


def rainfall_from_total(total_mm: float | None, snowfall_cm: float) -> float:
    """Non-snow share of the total precipitation (mm), never negative."""
    if total_mm is None:
        return 0.0
    return max(0.0, total_mm - snowfall_cm / SNOW_CM_PER_MM_WATER)


def points_from_daily_history(
    days: Iterable[DailyHistorySummary],
) -> list[WeatherDataPoint]:
    """Convert daily summaries into chronological daily data points.

    Days missing either temperature are skipped, since no conditions can be
    derived for them.
    """
    points: list[WeatherDataPoint] = []
    for day in sorted(days, key=lambda d: d.date):
        if day.temperature_min_c is None or day.temperature_max_c is None:
            logger.debug(f"Skipping {day.date.date()}: missing temperature data")
            continue

        snowfall_cm = day.snowfall_amount_cm
        if snowfall_cm is None:
            snowfall_cm = estimate_snow_from_precip(
                day.total_precipitation_mm, day.predominant_precipitation
            )
        snowfall_cm = snowfall_cm or 0.0

        points.append(
            WeatherDataPoint(
                start=day.date,
                end=day.date + timedelta(hours=HOURS_PER_DAY),
                snowfall_cm=snowfall_cm,
                rainfall_mm=rainfall_from_total(
                    day.total_precipitation_mm, snowfall_cm
                ),
                min_temp_c=day.temperature_min_c,
                max_temp_c=day.temperature_max_c,
                humidity=day.humidity if day.humidity is not None else 0.0,
            )
        )
    return points


def points_from_hourly_forecast(
    entries: Iterable[HourlyForecastEntry],
) -> list[WeatherDataPoint]:
    """Convert hourly forecast entries into chronological hourly data points.

    A single reading has no spread, so min and max are both the hour's
    temperature.
    """
    points: list[WeatherDataPoint] = []
    for entry in sorted(entries, key=lambda e: e.date):
        snowfall_cm = (
            estimate_snow_from_precip(
                entry.precipitation_amount_mm, entry.precipitation
            )
            or 0.0
        )
        points.append(
            WeatherDataPoint(
                start=entry.date,
                end=entry.date + timedelta(hours=1),
                snowfall_cm=snowfall_cm,
                rainfall_mm=rainfall_from_total(
                    entry.precipitation_amount_mm, snowfall_cm
                ),
                min_temp_c=entry.temperature_c,
                max_temp_c=entry.temperature_c,
                humidity=(
                    entry.relative_humidity
                    if entry.relative_humidity is not None
                    else 0.0
                ),
            )
        )
    return points
