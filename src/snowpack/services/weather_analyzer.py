"""Weather analyzer driving the snow surface classification pipeline.

For each data point, in order:
  1. Build ``DerivedConditions`` from the raw point and the current state
  2. Run the classification rule chain (first match wins)
  3. Record the assessment for the window
  4. Apply the state transition chain so the next window sees the new state

Aggregate statistics are computed once over the full series afterwards.
"""

import logging
from typing import Sequence

from snowpack.exceptions import EmptySeriesError
from snowpack.models.snow import (
    AssessmentResult,
    ConfidenceLevel,
    SnowSurfaceAssessment,
    SnowType,
)
from snowpack.models.snowpack import (
    DerivedConditions,
    SnowpackState,
    SnowpackThresholds,
)
from snowpack.models.weather import WeatherDataPoint, WeatherGranularity
from snowpack.services.classification_rules import (
    DEFAULT_CLASSIFICATION_RULES,
    SnowClassificationRule,
    classify,
)
from snowpack.services.state_transitions import (
    DEFAULT_STATE_TRANSITIONS,
    SnowpackStateTransition,
    apply_transitions,
)
from snowpack.utils.cache import cached_analysis
from snowpack.utils.constants import MM_PER_CM

logger = logging.getLogger(__name__)


class WeatherAnalyzer:
    """Classifies a chronological weather series into snow surface assessments.

    The analysis runs once, at construction. Thresholds and the rule and
    transition chains are only read, so they can be shared between any
    number of analyzers; each analyzer owns its own copy of the state.
    """

    def __init__(
        self,
        weather_data_points: Sequence[WeatherDataPoint],
        thresholds: SnowpackThresholds | None = None,
        classification_rules: Sequence[SnowClassificationRule] | None = None,
        state_transitions: Sequence[SnowpackStateTransition] | None = None,
        initial_state: SnowpackState | None = None,
        granularity: WeatherGranularity = WeatherGranularity.HOURLY,
    ):
        """Initialize the analyzer and process the whole series.

        Args:
            weather_data_points: Points in non-decreasing chronological order
            thresholds: Thresholds for every decision (defaults if omitted)
            classification_rules: Ordered rule chain, should end with a catch-all
            state_transitions: Ordered transition chain
            initial_state: State to start from (copied, never mutated)
            granularity: Window length for points whose end is not after start

        Raises:
            NoApplicableRuleError: if the rule chain has no match for a point
        """
        self.weather_data_points: tuple[WeatherDataPoint, ...] = tuple(
            weather_data_points
        )
        self.thresholds = (
            thresholds if thresholds is not None else SnowpackThresholds.defaults()
        )
        self.classification_rules = tuple(
            classification_rules
            if classification_rules is not None
            else DEFAULT_CLASSIFICATION_RULES
        )
        self.state_transitions = tuple(
            state_transitions
            if state_transitions is not None
            else DEFAULT_STATE_TRANSITIONS
        )
        self.granularity = granularity

        start_state = (
            initial_state if initial_state is not None else SnowpackState.initial()
        )
        self._state = start_state.model_copy()
        self._assessments: list[SnowSurfaceAssessment] = []

        self._run()
        self._compute_aggregates()

    def _run(self) -> None:
        if not self._is_chronological():
            logger.warning(
                "Weather data points are not in chronological order; "
                "state transitions will not be meaningful"
            )

        for index, point in enumerate(self.weather_data_points):
            window_hours = self._window_hours(point)
            conditions = DerivedConditions.build(
                snowfall_cm=point.snowfall_cm,
                min_temp_c=point.min_temp_c,
                max_temp_c=point.max_temp_c,
                humidity=point.humidity,
                state=self._state,
                thresholds=self.thresholds,
                window_hours=window_hours,
            )
            result = classify(
                conditions,
                self._state,
                self.thresholds,
                self.classification_rules,
                step_index=index,
            )
            self._assessments.append(
                self._build_assessment(index, point, conditions, result)
            )
            apply_transitions(
                conditions, self._state, self.thresholds, self.state_transitions
            )

        logger.debug(
            f"Analyzed {len(self._assessments)} {self.granularity.value} windows"
        )

    def _window_hours(self, point: WeatherDataPoint) -> int:
        """Hours the clocks advance for ``point``.

        The point's own span wins over the configured granularity, which only
        covers points without a usable span (end not after start).
        """
        if point.window_hours > 0:
            return point.window_hours
        logger.debug(
            f"Point starting {point.start} has no span, "
            f"using {self.granularity.hours}h from granularity"
        )
        return self.granularity.hours

    def _build_assessment(
        self,
        index: int,
        point: WeatherDataPoint,
        conditions: DerivedConditions,
        result: AssessmentResult,
    ) -> SnowSurfaceAssessment:
        return SnowSurfaceAssessment(
            index=index,
            start=point.start,
            end=point.end,
            result=result,
            snowfall_cm=conditions.snowfall_cm,
            min_temp_c=conditions.min_temp_c,
            max_temp_c=conditions.max_temp_c,
            humidity=conditions.humidity,
            hours_above_freezing=self._state.consecutive_hours_above_freezing,
            refreeze_detected=conditions.is_refrozen,
            hours_since_last_melt=self._state.hours_since_last_melt,
            hours_since_significant_snow=self._state.hours_since_significant_snow,
        )

    def _is_chronological(self) -> bool:
        points = self.weather_data_points
        return all(
            earlier.start <= later.start for earlier, later in zip(points, points[1:])
        )

    def _compute_aggregates(self) -> None:
        points = self.weather_data_points
        count = len(points)

        self._total_snowfall = sum(point.snowfall_cm for point in points)
        self._total_rainfall = sum(point.rainfall_mm for point in points)
        if count:
            self._average_snowfall = self._total_snowfall / count
            self._average_temperature = (
                sum(point.average_temperature for point in points) / count
            )
        else:
            self._average_snowfall = 0.0
            self._average_temperature = 0.0

    # Analysis results

    @property
    def assessments(self) -> tuple[SnowSurfaceAssessment, ...]:
        """The chronological assessments, one per data point."""
        return tuple(self._assessments)

    @property
    def results(self) -> tuple[AssessmentResult, ...]:
        return tuple(assessment.result for assessment in self._assessments)

    @property
    def final_state(self) -> SnowpackState:
        """A copy of the state after the last data point."""
        return self._state.model_copy()

    @property
    def current_assessment(self) -> SnowSurfaceAssessment:
        """The assessment for the most recent (last) data point.

        Raises:
            EmptySeriesError: if the series has no data points
        """
        if not self._assessments:
            raise EmptySeriesError()
        return self._assessments[-1]

    @property
    def current_snow_type(self) -> SnowType:
        return self.current_assessment.snow_type

    @property
    def current_confidence(self) -> ConfidenceLevel:
        return self.current_assessment.confidence

    @property
    def current_temperature(self) -> float:
        """Average temperature of the last data point."""
        if not self.weather_data_points:
            raise EmptySeriesError()
        return self.weather_data_points[-1].average_temperature

    # Aggregate statistics

    @property
    def average_temperature(self) -> float:
        """Mean of the per-point min/max midpoints (°C)."""
        return self._average_temperature

    @property
    def average_snowfall(self) -> float:
        """Mean snowfall per data point (cm)."""
        return self._average_snowfall

    @property
    def total_snowfall(self) -> float:
        """Total snowfall across all data points (cm)."""
        return self._total_snowfall

    @property
    def total_rainfall(self) -> float:
        """Total non-snow precipitation across all data points (mm)."""
        return self._total_rainfall

    # Configuration echoes

    @property
    def new_snow_threshold_mm(self) -> float:
        """Significant snowfall threshold converted to millimeters."""
        return self.thresholds.significant_snow_cm * MM_PER_CM

    @property
    def window_size_for_new_snow(self) -> int:
        """Hours snowfall stays new before becoming fine grained."""
        return self.thresholds.new_snow_window_hours

    @property
    def window_size_before_old_snow(self) -> int:
        """Hours before fine grained snow becomes old grained."""
        return self.thresholds.fine_grained_max_hours


@cached_analysis
def analyze_weather(
    weather_data_points: Sequence[WeatherDataPoint],
    thresholds: SnowpackThresholds | None = None,
    granularity: WeatherGranularity = WeatherGranularity.HOURLY,
) -> WeatherAnalyzer:
    """Analyze a series with the default rule and transition chains.

    Results are cached by series, thresholds and granularity.
    """
    return WeatherAnalyzer(
        weather_data_points, thresholds=thresholds, granularity=granularity
    )
