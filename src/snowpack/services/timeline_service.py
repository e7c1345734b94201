"""Collapse an assessment history into contiguous snow type segments."""

from typing import Iterable

from snowpack.models.snow import SnowSurfaceAssessment, SnowTypeSegment


def build_timeline(
    assessments: Iterable[SnowSurfaceAssessment],
) -> list[SnowTypeSegment]:
    """Group consecutive assessments with the same snow type.

    Each segment spans from the first window's start to the last window's
    end and reports the lowest confidence seen within it.
    """
    segments: list[SnowTypeSegment] = []
    for assessment in assessments:
        last = segments[-1] if segments else None
        if last is not None and last.snow_type == assessment.snow_type:
            segments[-1] = last.model_copy(
                update={
                    "end": assessment.end,
                    "window_count": last.window_count + 1,
                    "lowest_confidence": min(
                        last.lowest_confidence, assessment.confidence
                    ),
                }
            )
            continue

        segments.append(
            SnowTypeSegment(
                snow_type=assessment.snow_type,
                start=assessment.start,
                end=assessment.end,
                window_count=1,
                lowest_confidence=assessment.confidence,
            )
        )
    return segments
