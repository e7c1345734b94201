"""Tests for the snowpack state transition chain."""

from snowpack.models.snowpack import DerivedConditions, SnowpackState
from snowpack.services.state_transitions import (
    DEFAULT_STATE_TRANSITIONS,
    AgeSnowpackTransition,
    MeltTransition,
    SnowpackStateTransition,
    apply_transitions,
)


def _conditions(state, thresholds, window_hours=1, **kwargs) -> DerivedConditions:
    values = {
        "snowfall_cm": 0.0,
        "min_temp_c": -8.0,
        "max_temp_c": -3.0,
        "humidity": 0.5,
    }
    values.update(kwargs)
    return DerivedConditions.build(
        state=state, thresholds=thresholds, window_hours=window_hours, **values
    )


class MarkWetTransition:
    """Synthetic transition: marks the snowpack wet."""

    def should_apply(self, conditions, state, thresholds):
        return True

    def apply(self, conditions, state, thresholds):
        state.was_wet_recently = True


class CountIfWetTransition:
    """Synthetic transition: only fires once the snowpack is wet."""

    def should_apply(self, conditions, state, thresholds):
        return state.was_wet_recently

    def apply(self, conditions, state, thresholds):
        state.consecutive_hours_above_freezing = 5


class TestTransitionChain:
    """Ordering and visibility guarantees of apply_transitions()."""

    def test_mutations_visible_to_later_transitions(
        self, initial_state, default_thresholds
    ):
        conditions = _conditions(initial_state, default_thresholds)

        apply_transitions(
            conditions,
            initial_state,
            default_thresholds,
            [MarkWetTransition(), CountIfWetTransition()],
        )

        assert initial_state.was_wet_recently is True
        assert initial_state.consecutive_hours_above_freezing == 5

    def test_reversed_order_changes_outcome(self, initial_state, default_thresholds):
        conditions = _conditions(initial_state, default_thresholds)

        apply_transitions(
            conditions,
            initial_state,
            default_thresholds,
            [CountIfWetTransition(), MarkWetTransition()],
        )

        assert initial_state.was_wet_recently is True
        assert initial_state.consecutive_hours_above_freezing == 0

    def test_every_matching_transition_fires(self, initial_state, default_thresholds):
        conditions = _conditions(
            initial_state, default_thresholds, min_temp_c=-1.0, max_temp_c=3.0
        )

        state = apply_transitions(conditions, initial_state, default_thresholds)

        assert state is initial_state
        assert state.hours_since_significant_snow == 1
        assert state.hours_since_last_melt == 0
        assert state.was_wet_recently is True
        assert state.consecutive_hours_above_freezing == 1

    def test_default_transitions_satisfy_protocol(self):
        for transition in DEFAULT_STATE_TRANSITIONS:
            assert isinstance(transition, SnowpackStateTransition)


class TestDefaultTransitions:
    """Behaviour of the default transitions over one window."""

    def test_cold_dry_window_ages_snowpack(self, default_thresholds):
        state = SnowpackState(hours_since_significant_snow=10, hours_since_last_melt=4)
        conditions = _conditions(state, default_thresholds)

        apply_transitions(conditions, state, default_thresholds)

        assert state.hours_since_significant_snow == 11
        assert state.hours_since_last_melt == 5
        assert state.consecutive_hours_above_freezing == 0

    def test_daily_window_ages_by_a_day(self, default_thresholds):
        state = SnowpackState(hours_since_significant_snow=24)
        conditions = _conditions(state, default_thresholds, window_hours=24)

        apply_transitions(conditions, state, default_thresholds)

        assert state.hours_since_significant_snow == 48

    def test_significant_snow_resets_clock(self, default_thresholds):
        state = SnowpackState(hours_since_significant_snow=30)
        conditions = _conditions(state, default_thresholds, snowfall_cm=2.0)

        apply_transitions(conditions, state, default_thresholds)

        assert state.hours_since_significant_snow == 0

    def test_light_snow_does_not_reset_clock(self, default_thresholds):
        state = SnowpackState(hours_since_significant_snow=30)
        conditions = _conditions(state, default_thresholds, snowfall_cm=1.0)

        apply_transitions(conditions, state, default_thresholds)

        assert state.hours_since_significant_snow == 31

    def test_snow_accumulates_on_tracked_melt(self, default_thresholds):
        state = SnowpackState(
            hours_since_last_melt=3,
            snow_depth_since_last_melt=0.5,
            was_wet_recently=True,
        )
        conditions = _conditions(state, default_thresholds, snowfall_cm=1.25)

        apply_transitions(conditions, state, default_thresholds)

        assert state.snow_depth_since_last_melt == 1.75
        assert state.hours_since_last_melt == 4

    def test_snow_does_not_accumulate_without_melt(self, initial_state, default_thresholds):
        conditions = _conditions(initial_state, default_thresholds, snowfall_cm=5.0)

        apply_transitions(conditions, initial_state, default_thresholds)

        assert initial_state.snow_depth_since_last_melt == 0.0

    def test_melt_resets_depth(self, default_thresholds):
        state = SnowpackState(hours_since_last_melt=20, snow_depth_since_last_melt=4.0)
        conditions = _conditions(
            state, default_thresholds, snowfall_cm=1.0, min_temp_c=0.0, max_temp_c=1.0
        )

        apply_transitions(conditions, state, default_thresholds)

        assert state.hours_since_last_melt == 0
        assert state.snow_depth_since_last_melt == 0.0
        assert state.was_wet_recently is True

    def test_stale_melt_is_forgotten(self, default_thresholds):
        state = SnowpackState(
            hours_since_last_melt=72,
            snow_depth_since_last_melt=1.0,
            was_wet_recently=True,
        )
        conditions = _conditions(state, default_thresholds)

        AgeSnowpackTransition().apply(conditions, state, default_thresholds)

        assert state.hours_since_last_melt is None
        assert state.snow_depth_since_last_melt == 0.0
        assert state.was_wet_recently is False

    def test_melt_at_window_edge_is_kept(self, default_thresholds):
        state = SnowpackState(hours_since_last_melt=71, was_wet_recently=True)
        conditions = _conditions(state, default_thresholds)

        AgeSnowpackTransition().apply(conditions, state, default_thresholds)

        assert state.hours_since_last_melt == 72
        assert state.was_wet_recently is True

    def test_above_freezing_counter(self, default_thresholds):
        state = SnowpackState(consecutive_hours_above_freezing=2)
        warm = _conditions(state, default_thresholds, min_temp_c=-2.0, max_temp_c=0.2)

        apply_transitions(warm, state, default_thresholds)
        assert state.consecutive_hours_above_freezing == 3
        # Above freezing but below the wet threshold: no melt recorded
        assert state.hours_since_last_melt is None

        cold = _conditions(state, default_thresholds)
        apply_transitions(cold, state, default_thresholds)
        assert state.consecutive_hours_above_freezing == 0

    def test_melt_predicate(self, initial_state, default_thresholds):
        transition = MeltTransition()
        wet = _conditions(initial_state, default_thresholds, max_temp_c=0.5)
        dry = _conditions(initial_state, default_thresholds, max_temp_c=0.4)

        assert transition.should_apply(wet, initial_state, default_thresholds)
        assert not transition.should_apply(dry, initial_state, default_thresholds)
