"""Coordinate analyses requested from interactive callers.

A session publishes results last-writer-wins: every request gets a token,
and a finished analysis is only published if no newer request has been
made since. Stale results are dropped, never merged.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Hashable, Mapping, Sequence

from snowpack.config import ANALYSIS_CONCURRENCY
from snowpack.exceptions import NoApplicableRuleError
from snowpack.models.snowpack import SnowpackState, SnowpackThresholds
from snowpack.models.weather import WeatherDataPoint, WeatherGranularity
from snowpack.services.weather_analyzer import WeatherAnalyzer, analyze_weather

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Holds the latest analysis for one consumer (e.g. a UI screen)."""

    def __init__(
        self,
        thresholds: SnowpackThresholds | None = None,
        granularity: WeatherGranularity = WeatherGranularity.HOURLY,
    ):
        self.thresholds = (
            thresholds if thresholds is not None else SnowpackThresholds.defaults()
        )
        self.granularity = granularity
        self._lock = threading.Lock()
        self._latest_token = 0
        self._latest: WeatherAnalyzer | None = None

    def begin(self) -> int:
        """Register a new request and return its token.

        Any analysis started with an older token becomes stale.
        """
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    def publish(self, token: int, analyzer: WeatherAnalyzer) -> bool:
        """Publish a finished analysis if its request is still the newest.

        Returns:
            True if published, False if the result was stale and discarded
        """
        with self._lock:
            if token != self._latest_token:
                logger.warning(
                    f"Discarding stale analysis for request {token} "
                    f"(latest is {self._latest_token})"
                )
                return False
            self._latest = analyzer

        logger.info(
            f"Published analysis for request {token}: "
            f"{len(analyzer.assessments)} windows"
        )
        return True

    def analyze(
        self,
        weather_data_points: Sequence[WeatherDataPoint],
        initial_state: SnowpackState | None = None,
    ) -> WeatherAnalyzer | None:
        """Run an analysis for a new series and publish it.

        Returns:
            The analyzer if it was published, None if a newer request
            superseded it while it was running
        """
        token = self.begin()
        if initial_state is None:
            analyzer = analyze_weather(
                weather_data_points, self.thresholds, self.granularity
            )
        else:
            analyzer = WeatherAnalyzer(
                weather_data_points,
                thresholds=self.thresholds,
                initial_state=initial_state,
                granularity=self.granularity,
            )
        return analyzer if self.publish(token, analyzer) else None

    @property
    def latest(self) -> WeatherAnalyzer | None:
        """The most recently published analysis, if any."""
        with self._lock:
            return self._latest


def analyze_batch(
    series_by_key: Mapping[Hashable, Sequence[WeatherDataPoint]],
    thresholds: SnowpackThresholds | None = None,
    granularity: WeatherGranularity = WeatherGranularity.HOURLY,
    max_workers: int = ANALYSIS_CONCURRENCY,
) -> dict[Hashable, WeatherAnalyzer]:
    """Analyze independent series concurrently.

    Each run owns its own state; only the thresholds and chains are shared.
    A series that fails is logged and left out of the result.
    """
    if thresholds is None:
        thresholds = SnowpackThresholds.defaults()
    results: dict[Hashable, WeatherAnalyzer] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                WeatherAnalyzer,
                points,
                thresholds=thresholds,
                granularity=granularity,
            ): key
            for key, points in series_by_key.items()
        }

        for future in as_completed(futures):
            key = futures[future]
            try:
                results[key] = future.result()
            except NoApplicableRuleError:
                raise
            except Exception as e:
                logger.error(f"Error analyzing series {key}: {e}")

    return results
