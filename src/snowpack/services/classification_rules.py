"""Snow surface classification rules.

Rules are evaluated in order and the first one whose ``can_apply`` returns
True produces the assessment for the window. Rules never mutate the state;
bookkeeping belongs to the state transitions.
"""

import logging
from typing import Protocol, Sequence, runtime_checkable

from snowpack.exceptions import NoApplicableRuleError
from snowpack.models.snow import AssessmentResult, ConfidenceLevel, SnowType
from snowpack.models.snowpack import (
    DerivedConditions,
    SnowpackState,
    SnowpackThresholds,
)
from snowpack.utils.constants import HOURS_PER_DAY

logger = logging.getLogger(__name__)


@runtime_checkable
class SnowClassificationRule(Protocol):
    """A single priority-ordered rule in the classification chain."""

    def can_apply(
        self,
        conditions: DerivedConditions,
        state: SnowpackState,
        thresholds: SnowpackThresholds,
    ) -> bool:
        """Whether this rule applies given the current conditions and state."""
        ...

    def apply(
        self,
        conditions: DerivedConditions,
        state: SnowpackState,
        thresholds: SnowpackThresholds,
    ) -> AssessmentResult:
        """Produce the assessment. Only called when ``can_apply`` returned True."""
        ...


def _format_cm(value: float) -> str:
    return f"{value:.1f}"


def _format_temp(value: float) -> str:
    return f"{value:.1f}"


def _wet_confidence(state: SnowpackState) -> ConfidenceLevel:
    # Already above freezing in the previous window: sustained warmth
    if state.consecutive_hours_above_freezing > 0:
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.MEDIUM


class SlushRule:
    """Max temperature at or above the slush threshold: very wet corn."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return (
            conditions.is_currently_wet
            and conditions.max_temp_c >= thresholds.slush_temp_threshold
        )

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        return AssessmentResult(
            snow_type=SnowType.VERY_WET_CORN,
            confidence=_wet_confidence(state),
            reason_key="snow_reason_very_wet",
            reason_params={"max_temp": _format_temp(conditions.max_temp_c)},
        )


class FreshSnowfallRule:
    """Significant snow fell during this window."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return conditions.has_significant_snow

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        params = {"snowfall": _format_cm(conditions.snowfall_cm)}
        if conditions.max_temp_c >= thresholds.moist_snow_boundary:
            return AssessmentResult(
                snow_type=SnowType.MOIST_NEW_FALLEN,
                confidence=ConfidenceLevel.HIGH,
                reason_key="snow_reason_moist_new_snow",
                reason_params={
                    **params,
                    "max_temp": _format_temp(conditions.max_temp_c),
                },
            )
        return AssessmentResult(
            snow_type=SnowType.NEW_FALLEN,
            confidence=ConfidenceLevel.HIGH,
            reason_key="snow_reason_new_snow",
            reason_params=params,
        )


class WetSnowRule:
    """Free water present: wet corn."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return conditions.is_currently_wet

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        return AssessmentResult(
            snow_type=SnowType.WET_CORN,
            confidence=_wet_confidence(state),
            reason_key="snow_reason_wet",
            reason_params={"max_temp": _format_temp(conditions.max_temp_c)},
        )


class RefrozenSurfaceRule:
    """A recently wet surface that has frozen again without new cover."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return conditions.is_refrozen and state.was_wet_recently

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        return AssessmentResult(
            snow_type=SnowType.FROZEN_CORN,
            confidence=(
                ConfidenceLevel.HIGH if conditions.is_cold else ConfidenceLevel.MEDIUM
            ),
            reason_key="snow_reason_refrozen",
            reason_params={
                "hours_since_melt": str(state.hours_since_last_melt),
                "avg_temp": _format_temp(conditions.avg_temp_c),
            },
        )


class RecentSnowRule:
    """Significant snow fell within the new snow window."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return state.hours_since_significant_snow < thresholds.new_snow_window_hours

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        params = {"hours": str(state.hours_since_significant_snow)}
        if conditions.is_moist:
            return AssessmentResult(
                snow_type=SnowType.MOIST_NEW_FALLEN,
                confidence=ConfidenceLevel.MEDIUM,
                reason_key="snow_reason_recent_moist_snow",
                reason_params=params,
            )
        return AssessmentResult(
            snow_type=SnowType.NEW_FALLEN,
            confidence=ConfidenceLevel.MEDIUM,
            reason_key="snow_reason_recent_snow",
            reason_params=params,
        )


class LightSnowRule:
    """A dusting refreshed the surface without forming a new layer."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return conditions.has_light_snow

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        params = {"snowfall": _format_cm(conditions.snowfall_cm)}
        if conditions.is_moist:
            return AssessmentResult(
                snow_type=SnowType.MOIST_FINE_GRAINED,
                confidence=ConfidenceLevel.MEDIUM,
                reason_key="snow_reason_light_moist_snow",
                reason_params=params,
            )
        return AssessmentResult(
            snow_type=SnowType.FINE_GRAINED,
            confidence=ConfidenceLevel.MEDIUM,
            reason_key="snow_reason_light_snow",
            reason_params=params,
        )


class MoistSurfaceRule:
    """Near zero but not wet: moist or transformed fine grains."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return conditions.is_moist

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        params = {"max_temp": _format_temp(conditions.max_temp_c)}
        if conditions.is_high_humidity:
            return AssessmentResult(
                snow_type=SnowType.TRANSFORMED_MOIST_FINE,
                confidence=ConfidenceLevel.MEDIUM,
                reason_key="snow_reason_transformed_moist",
                reason_params={
                    **params,
                    "humidity": f"{conditions.humidity * 100:.0f}",
                },
            )
        return AssessmentResult(
            snow_type=SnowType.MOIST_FINE_GRAINED,
            confidence=ConfidenceLevel.MEDIUM,
            reason_key="snow_reason_moist_fine",
            reason_params=params,
        )


class FineGrainedRule:
    """Dry snow that is no longer new but not yet old."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return state.hours_since_significant_snow < thresholds.fine_grained_max_hours

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        return AssessmentResult(
            snow_type=SnowType.FINE_GRAINED,
            confidence=(
                ConfidenceLevel.HIGH if conditions.is_cold else ConfidenceLevel.MEDIUM
            ),
            reason_key="snow_reason_fine_grained",
            reason_params={"hours": str(state.hours_since_significant_snow)},
        )


class OldGrainedRule:
    """Terminal catch-all: dry snow with no recent snowfall."""

    def can_apply(self, conditions, state, thresholds) -> bool:
        return True

    def apply(self, conditions, state, thresholds) -> AssessmentResult:
        return AssessmentResult(
            snow_type=SnowType.OLD_GRAINED,
            confidence=(
                ConfidenceLevel.HIGH
                if conditions.is_very_cold
                else ConfidenceLevel.MEDIUM
            ),
            reason_key="snow_reason_old_grained",
            reason_params={
                "days": str(state.hours_since_significant_snow // HOURS_PER_DAY),
            },
        )


DEFAULT_CLASSIFICATION_RULES: tuple[SnowClassificationRule, ...] = (
    SlushRule(),
    FreshSnowfallRule(),
    WetSnowRule(),
    RefrozenSurfaceRule(),
    RecentSnowRule(),
    LightSnowRule(),
    MoistSurfaceRule(),
    FineGrainedRule(),
    OldGrainedRule(),
)


def classify(
    conditions: DerivedConditions,
    state: SnowpackState,
    thresholds: SnowpackThresholds,
    rules: Sequence[SnowClassificationRule] = DEFAULT_CLASSIFICATION_RULES,
    step_index: int | None = None,
) -> AssessmentResult:
    """Run the rule chain and return the first matching rule's result.

    Raises:
        NoApplicableRuleError: if no rule in the chain applies
    """
    for rule in rules:
        if rule.can_apply(conditions, state, thresholds):
            result = rule.apply(conditions, state, thresholds)
            logger.debug(
                f"{type(rule).__name__} classified step {step_index} as "
                f"{result.snow_type.value} ({result.confidence.value})"
            )
            return result

    logger.error(f"No classification rule applied to step {step_index}")
    raise NoApplicableRuleError(step_index)
