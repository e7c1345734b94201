"""Snow surface classification data models."""

from datetime import datetime
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class SnowGroup(IntEnum):
    """Five-group wax taxonomy the surface categories roll up into."""

    FALLING_NEW = 1  # Falling / newly fallen snow with sharp crystals
    FINE_GRAINED = 2  # Intermediate stage of transformation
    OLD = 3  # Uniform, rounded, bonded grains
    WET = 4  # Free water present
    REFROZEN = 5  # Wet snow that has frozen again (crust / ice)


class SnowType(str, Enum):
    """Mutually exclusive snow surface categories."""

    NEW_FALLEN = "new_fallen"  # Dry, sharp crystals
    MOIST_NEW_FALLEN = "moist_new_fallen"
    FINE_GRAINED = "fine_grained"  # Dry
    MOIST_FINE_GRAINED = "moist_fine_grained"
    OLD_GRAINED = "old_grained"  # Rounded / partly transformed, generally dry
    TRANSFORMED_MOIST_FINE = "transformed_moist_fine"  # Near 0°C, humid
    FROZEN_CORN = "frozen_corn"  # Refrozen coarse
    WET_CORN = "wet_corn"  # Free water present
    VERY_WET_CORN = "very_wet_corn"  # Slushy

    @property
    def group(self) -> SnowGroup:
        """Get the wax group this surface belongs to."""
        return _SNOW_TYPE_GROUPS[self]

    @property
    def title(self) -> str:
        """Get a display title."""
        return SNOW_TYPE_TITLES[self]


_SNOW_TYPE_GROUPS: dict[SnowType, SnowGroup] = {
    SnowType.NEW_FALLEN: SnowGroup.FALLING_NEW,
    SnowType.MOIST_NEW_FALLEN: SnowGroup.FALLING_NEW,
    SnowType.FINE_GRAINED: SnowGroup.FINE_GRAINED,
    SnowType.MOIST_FINE_GRAINED: SnowGroup.FINE_GRAINED,
    SnowType.TRANSFORMED_MOIST_FINE: SnowGroup.FINE_GRAINED,
    SnowType.OLD_GRAINED: SnowGroup.OLD,
    SnowType.WET_CORN: SnowGroup.WET,
    SnowType.VERY_WET_CORN: SnowGroup.WET,
    SnowType.FROZEN_CORN: SnowGroup.REFROZEN,
}

SNOW_TYPE_TITLES: dict[SnowType, str] = {
    SnowType.NEW_FALLEN: "New Snow",
    SnowType.MOIST_NEW_FALLEN: "Moist New Snow",
    SnowType.FINE_GRAINED: "Fine Grained",
    SnowType.MOIST_FINE_GRAINED: "Moist Fine Grained",
    SnowType.OLD_GRAINED: "Old Grained",
    SnowType.TRANSFORMED_MOIST_FINE: "Transformed Moist Fine",
    SnowType.FROZEN_CORN: "Frozen Corn",
    SnowType.WET_CORN: "Wet Corn",
    SnowType.VERY_WET_CORN: "Very Wet Corn",
}


class ConfidenceLevel(str, Enum):
    """Confidence in a classification, ordered low < medium < high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank >= other.rank


_CONFIDENCE_RANKS: dict[ConfidenceLevel, int] = {
    ConfidenceLevel.LOW: 0,
    ConfidenceLevel.MEDIUM: 1,
    ConfidenceLevel.HIGH: 2,
}


class AssessmentResult(BaseModel):
    """The outcome produced by a single classification rule."""

    snow_type: SnowType = Field(..., description="Determined snow surface type")
    confidence: ConfidenceLevel = Field(
        ..., description="Confidence the rule has in its classification"
    )
    reason_key: str = Field(
        ..., description="Stable identifier describing why this result was chosen"
    )
    reason_params: dict[str, str] = Field(
        default_factory=dict, description="Template parameters for the reason"
    )

    model_config = ConfigDict(frozen=True)


class SnowSurfaceAssessment(BaseModel):
    """Assessment of one weather window, with the inputs that produced it."""

    index: int = Field(..., ge=0, description="Position in the analysed series")
    start: datetime = Field(..., description="Start of the weather window")
    end: datetime = Field(..., description="End of the weather window")
    result: AssessmentResult

    # Supporting metrics as seen by the rule chain (for debugging/inspection)
    snowfall_cm: float = Field(..., description="Snowfall during the window (cm)")
    min_temp_c: float = Field(..., description="Minimum temperature (°C)")
    max_temp_c: float = Field(..., description="Maximum temperature (°C)")
    humidity: float = Field(..., description="Relative humidity (0-1)")
    hours_above_freezing: int = Field(
        default=0, description="Consecutive hours above freezing before this window"
    )
    refreeze_detected: bool = Field(default=False)
    hours_since_last_melt: int | None = Field(
        None, description="Hours since the last tracked melt, None if untracked"
    )
    hours_since_significant_snow: int = Field(default=0)

    model_config = ConfigDict(frozen=True)

    @property
    def snow_type(self) -> SnowType:
        return self.result.snow_type

    @property
    def confidence(self) -> ConfidenceLevel:
        return self.result.confidence


class SnowTypeSegment(BaseModel):
    """A run of consecutive windows sharing the same snow type."""

    snow_type: SnowType
    start: datetime
    end: datetime
    window_count: int = Field(..., ge=1)
    lowest_confidence: ConfidenceLevel

    @property
    def duration_hours(self) -> float:
        """Get the segment length in hours."""
        return (self.end - self.start).total_seconds() / 3600.0
