"""Shared constants for the snowpack package."""

HOURS_PER_DAY: int = 24

# Unit conversion between snow amounts reported in cm and precipitation in mm
MM_PER_CM: float = 10.0

# Fraction of mixed precipitation assumed to have fallen as snow
MIXED_PRECIPITATION_SNOW_FRACTION: float = 0.5

# Prefix for environment variables read by snowpack.config
ENV_PREFIX: str = "SNOWPACK_"

# Fresh snow depth (cm) per millimeter of water equivalent
SNOW_CM_PER_MM_WATER: float = 1.0
