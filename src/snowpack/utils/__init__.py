"""Utility helpers for the snowpack package."""

from .constants import (
    ENV_PREFIX,
    HOURS_PER_DAY,
    MIXED_PRECIPITATION_SNOW_FRACTION,
    MM_PER_CM,
    SNOW_CM_PER_MM_WATER,
)

# Note: the analysis cache is not imported here to avoid a circular import
# with models. Import it directly: from snowpack.utils.cache import ...

__all__ = [
    "ENV_PREFIX",
    "HOURS_PER_DAY",
    "MIXED_PRECIPITATION_SNOW_FRACTION",
    "MM_PER_CM",
    "SNOW_CM_PER_MM_WATER",
]
