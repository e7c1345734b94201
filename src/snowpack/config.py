"""Environment-driven configuration for the snowpack engine.

Every threshold can be overridden with a ``SNOWPACK_<FIELD>`` environment
variable, e.g. ``SNOWPACK_SIGNIFICANT_SNOW_CM=3.0``. Unset variables fall
back to the production defaults.
"""

import logging
import os
from collections.abc import Mapping

from snowpack.exceptions import ConfigurationError
from snowpack.models.snowpack import SnowpackThresholds
from snowpack.utils.constants import ENV_PREFIX

logger = logging.getLogger(__name__)


def int_setting(
    name: str, default: int, environ: Mapping[str, str] | None = None
) -> int:
    """Read an integer setting from ``SNOWPACK_<NAME>``.

    Raises:
        ConfigurationError: if the variable is set but not an integer
    """
    environ = os.environ if environ is None else environ
    env_name = f"{ENV_PREFIX}{name}"
    raw_value = environ.get(env_name)
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return int(raw_value.strip())
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {env_name}: {raw_value!r}"
        ) from e


# Number of independent series analysed concurrently by analyze_batch
ANALYSIS_CONCURRENCY = int_setting("ANALYSIS_CONCURRENCY", 3)
# TTL for cached analysis results (seconds)
CACHE_TTL_SECONDS = int_setting("CACHE_TTL_SECONDS", 300)


def threshold_env_name(field_name: str) -> str:
    """Get the environment variable name for a threshold field."""
    return f"{ENV_PREFIX}{field_name.upper()}"


def load_thresholds(environ: Mapping[str, str] | None = None) -> SnowpackThresholds:
    """Build thresholds from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        SnowpackThresholds with overrides applied

    Raises:
        ConfigurationError: if a variable cannot be parsed for its field
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, float | int] = {}

    for field_name, field_info in SnowpackThresholds.model_fields.items():
        raw_value = environ.get(threshold_env_name(field_name))
        if raw_value is None or raw_value.strip() == "":
            continue

        field_type = field_info.annotation
        try:
            overrides[field_name] = field_type(raw_value.strip())
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid value for {threshold_env_name(field_name)}: {raw_value!r}"
            ) from e

    if overrides:
        logger.info(f"Threshold overrides from environment: {sorted(overrides)}")
        return SnowpackThresholds(**overrides)
    return SnowpackThresholds.defaults()
