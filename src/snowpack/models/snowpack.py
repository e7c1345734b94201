"""Snowpack thresholds, temporal state and per-window derived conditions."""

from pydantic import BaseModel, ConfigDict, Field


class SnowpackThresholds(BaseModel):
    """All tunable thresholds used by the classification pipeline.

    Constructed once and shared read-only by every analysis run. Ordering
    between boundaries is not validated; a misconfigured instance is a
    caller error.
    """

    # Snow amount boundaries (centimeters)
    significant_snow_cm: float = Field(
        default=2.0, description="At or above this a new layer is significant"
    )
    light_snow_cm: float = Field(
        default=0.5, description="At or above this the surface is refreshed"
    )

    # Temperature boundaries (Celsius)
    freezing_point: float = Field(default=0.0)
    moist_snow_boundary: float = Field(
        default=-1.0, description="Max temp at or above this allows moist snow"
    )
    cold_snow_boundary: float = Field(
        default=-7.0, description="Average temp at or below this is cold and dry"
    )
    very_cold_boundary: float = Field(
        default=-12.0, description="Average temp at or below this slows metamorphism"
    )
    wet_snow_temp_threshold: float = Field(
        default=0.5, description="Max temp at or above this means wet snow"
    )
    slush_temp_threshold: float = Field(
        default=2.0, description="Max temp at or above this means slush"
    )

    # Time windows (hours)
    new_snow_window_hours: int = Field(
        default=48, description="Snow remains new for this long"
    )
    fine_grained_max_hours: int = Field(
        default=96, description="After this, fine grained becomes old grained"
    )
    melt_relevance_window_hours: int = Field(
        default=72, description="A melt affects the surface for this long"
    )

    # Humidity
    high_humidity_threshold: float = Field(
        default=0.80, description="Relative humidity (0-1) counted as high"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def defaults(cls) -> "SnowpackThresholds":
        """Production defaults."""
        return DEFAULT_THRESHOLDS


DEFAULT_THRESHOLDS = SnowpackThresholds()


class SnowpackState(BaseModel):
    """Evolving memory of the snowpack surface.

    Owned by exactly one analysis run and mutated only by state transitions.
    """

    hours_since_significant_snow: int = Field(default=0, ge=0)
    # None means no melt is tracked: it never happened or it fell outside
    # the melt relevance window.
    hours_since_last_melt: int | None = Field(default=None, ge=0)
    snow_depth_since_last_melt: float = Field(
        default=0.0, ge=0, description="Snow (cm) accumulated since the last melt"
    )
    was_wet_recently: bool = Field(
        default=False,
        description="Free liquid water within the melt relevance window",
    )
    consecutive_hours_above_freezing: int = Field(default=0, ge=0)

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def initial(cls) -> "SnowpackState":
        """Zero state: no history known."""
        return cls()

    def is_refrozen_surface(
        self, current_temp_c: float, thresholds: SnowpackThresholds
    ) -> bool:
        """Whether the surface qualifies as refrozen at the given temperature.

        True only when a melt occurred within the relevance window, no
        significant snow has covered it since, and it is below freezing now.
        """
        if self.hours_since_last_melt is None:
            return False
        if self.hours_since_last_melt > thresholds.melt_relevance_window_hours:
            return False
        if self.snow_depth_since_last_melt >= thresholds.significant_snow_cm:
            return False
        return current_temp_c < thresholds.freezing_point


class DerivedConditions(BaseModel):
    """Pre-computed snapshot of one weather window, consumed by rules."""

    snowfall_cm: float
    min_temp_c: float
    max_temp_c: float
    avg_temp_c: float
    humidity: float
    window_hours: int = 1

    # Boolean flags derived from thresholds
    has_significant_snow: bool
    has_light_snow: bool
    is_above_freezing: bool
    is_currently_wet: bool
    is_moist: bool
    is_very_cold: bool
    is_cold: bool
    is_high_humidity: bool
    is_refrozen: bool

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(
        cls,
        snowfall_cm: float,
        min_temp_c: float,
        max_temp_c: float,
        humidity: float,
        state: SnowpackState,
        thresholds: SnowpackThresholds,
        window_hours: int = 1,
    ) -> "DerivedConditions":
        """Build the derived conditions from raw weather values and current state."""
        avg_temp_c = (min_temp_c + max_temp_c) / 2.0
        return cls(
            snowfall_cm=snowfall_cm,
            min_temp_c=min_temp_c,
            max_temp_c=max_temp_c,
            avg_temp_c=avg_temp_c,
            humidity=humidity,
            window_hours=window_hours,
            has_significant_snow=snowfall_cm >= thresholds.significant_snow_cm,
            has_light_snow=snowfall_cm >= thresholds.light_snow_cm,
            is_above_freezing=max_temp_c > thresholds.freezing_point,
            is_currently_wet=max_temp_c >= thresholds.wet_snow_temp_threshold,
            is_moist=(
                thresholds.moist_snow_boundary
                <= max_temp_c
                < thresholds.wet_snow_temp_threshold
            ),
            is_very_cold=avg_temp_c <= thresholds.very_cold_boundary,
            is_cold=avg_temp_c <= thresholds.cold_snow_boundary,
            is_high_humidity=humidity >= thresholds.high_humidity_threshold,
            is_refrozen=state.is_refrozen_surface(avg_temp_c, thresholds),
        )
