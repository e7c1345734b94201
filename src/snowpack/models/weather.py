"""Weather observation data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from snowpack.utils.constants import HOURS_PER_DAY, SNOW_CM_PER_MM_WATER


class WeatherGranularity(str, Enum):
    """Length of the window each data point covers."""

    HOURLY = "hourly"
    DAILY = "daily"

    @property
    def hours(self) -> int:
        """Get the number of hours one window spans."""
        return HOURS_PER_DAY if self is WeatherGranularity.DAILY else 1


class PrecipitationType(str, Enum):
    """Predominant precipitation type reported for a window."""

    NONE = "none"
    SNOW = "snow"
    MIXED = "mixed"
    RAIN = "rain"
    SLEET = "sleet"
    HAIL = "hail"


class WeatherDataPoint(BaseModel):
    """Weather observed (or forecast) over a single window."""

    start: datetime = Field(..., description="Start of the window")
    end: datetime = Field(..., description="End of the window")

    # Precipitation
    snowfall_cm: float = Field(
        default=0.0, ge=0, description="Snow that fell during the window (cm)"
    )
    rainfall_mm: float = Field(
        default=0.0,
        ge=0,
        description="Non-snow precipitation (rain, sleet, hail, mixed) in mm",
    )

    # Temperature data
    min_temp_c: float = Field(..., description="Minimum temperature in the window")
    max_temp_c: float = Field(..., description="Maximum temperature in the window")

    humidity: float = Field(
        default=0.0, ge=0, le=1, description="Relative humidity as a fraction"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def average_temperature(self) -> float:
        """Midpoint of min/max, not a time-weighted average."""
        return (self.min_temp_c + self.max_temp_c) / 2.0

    @property
    def total_precipitation_mm(self) -> float:
        """Get snow water equivalent plus rain in millimeters."""
        return self.snowfall_cm / SNOW_CM_PER_MM_WATER + self.rainfall_mm

    @property
    def window_hours(self) -> int:
        """Get the whole hours this window spans (0 if end is not after start)."""
        return max(0, int((self.end - self.start).total_seconds() // 3600))


class DailyHistorySummary(BaseModel):
    """Past daily weather as reported by a weather provider."""

    date: datetime
    temperature_min_c: float | None = None
    temperature_max_c: float | None = None
    total_precipitation_mm: float | None = Field(None, ge=0)
    snowfall_amount_cm: float | None = Field(None, ge=0)
    predominant_precipitation: PrecipitationType | None = None
    humidity: float | None = Field(None, ge=0, le=1)


class HourlyForecastEntry(BaseModel):
    """One hour of forecast weather."""

    date: datetime
    temperature_c: float
    precipitation_chance: float = Field(default=0.0, ge=0, le=1)
    precipitation: PrecipitationType | None = None
    precipitation_amount_mm: float = Field(default=0.0, ge=0)
    relative_humidity: float | None = Field(None, ge=0, le=1)
