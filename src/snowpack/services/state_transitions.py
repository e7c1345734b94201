"""Snowpack state transitions.

Applied after classification, in registered order. Every transition whose
``should_apply`` returns True fires, and each sees the mutations made by the
ones before it in the same step. Order matters: transitions do not commute.
"""

import logging
from typing import Protocol, Sequence, runtime_checkable

from snowpack.models.snowpack import (
    DerivedConditions,
    SnowpackState,
    SnowpackThresholds,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class SnowpackStateTransition(Protocol):
    """Defines how one weather window mutates the snowpack state."""

    def should_apply(
        self,
        conditions: DerivedConditions,
        state: SnowpackState,
        thresholds: SnowpackThresholds,
    ) -> bool:
        """Whether this transition fires for the given conditions."""
        ...

    def apply(
        self,
        conditions: DerivedConditions,
        state: SnowpackState,
        thresholds: SnowpackThresholds,
    ) -> None:
        """Mutate the state in place. Only called when ``should_apply`` returned True."""
        ...


class AgeSnowpackTransition:
    """Advance the clocks by one window and expire stale melt history."""

    def should_apply(self, conditions, state, thresholds) -> bool:
        return True

    def apply(self, conditions, state, thresholds) -> None:
        state.hours_since_significant_snow += conditions.window_hours

        if state.hours_since_last_melt is None:
            return

        hours_since_melt = state.hours_since_last_melt + conditions.window_hours
        if hours_since_melt > thresholds.melt_relevance_window_hours:
            # Melt fell outside the relevance window: stop tracking it
            state.hours_since_last_melt = None
            state.snow_depth_since_last_melt = 0.0
            state.was_wet_recently = False
        else:
            state.hours_since_last_melt = hours_since_melt


class SnowAccumulationTransition:
    """Accumulate snowfall on top of a tracked melt surface."""

    def should_apply(self, conditions, state, thresholds) -> bool:
        return conditions.snowfall_cm > 0 and state.hours_since_last_melt is not None

    def apply(self, conditions, state, thresholds) -> None:
        state.snow_depth_since_last_melt += conditions.snowfall_cm


class SignificantSnowfallTransition:
    """Restart the new snow clock."""

    def should_apply(self, conditions, state, thresholds) -> bool:
        return conditions.has_significant_snow

    def apply(self, conditions, state, thresholds) -> None:
        state.hours_since_significant_snow = 0


class MeltTransition:
    """Record a melt event: the surface holds free water."""

    def should_apply(self, conditions, state, thresholds) -> bool:
        return conditions.is_currently_wet

    def apply(self, conditions, state, thresholds) -> None:
        state.hours_since_last_melt = 0
        state.snow_depth_since_last_melt = 0.0
        state.was_wet_recently = True


class AboveFreezingTransition:
    def should_apply(self, conditions, state, thresholds) -> bool:
        return conditions.is_above_freezing

    def apply(self, conditions, state, thresholds) -> None:
        state.consecutive_hours_above_freezing += conditions.window_hours


class BelowFreezingTransition:
    def should_apply(self, conditions, state, thresholds) -> bool:
        return not conditions.is_above_freezing

    def apply(self, conditions, state, thresholds) -> None:
        state.consecutive_hours_above_freezing = 0


DEFAULT_STATE_TRANSITIONS: tuple[SnowpackStateTransition, ...] = (
    AgeSnowpackTransition(),
    SnowAccumulationTransition(),
    SignificantSnowfallTransition(),
    MeltTransition(),
    AboveFreezingTransition(),
    BelowFreezingTransition(),
)


def apply_transitions(
    conditions: DerivedConditions,
    state: SnowpackState,
    thresholds: SnowpackThresholds,
    transitions: Sequence[SnowpackStateTransition] = DEFAULT_STATE_TRANSITIONS,
) -> SnowpackState:
    """Apply every matching transition to ``state`` in order.

    The state is mutated in place and returned for convenience.
    """
    for transition in transitions:
        if transition.should_apply(conditions, state, thresholds):
            transition.apply(conditions, state, thresholds)
            logger.debug(f"Applied {type(transition).__name__}")
    return state
