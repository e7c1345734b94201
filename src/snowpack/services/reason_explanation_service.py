"""Service for rendering reason keys as natural language explanations."""

from snowpack.models.snow import AssessmentResult, SnowSurfaceAssessment

REASON_TEMPLATES: dict[str, str] = {
    "snow_reason_very_wet": "Very wet, slushy snow: temperatures up to {max_temp}°C.",
    "snow_reason_new_snow": "New snow: {snowfall}cm fell in this period.",
    "snow_reason_moist_new_snow": (
        "Moist new snow: {snowfall}cm fell with temperatures up to {max_temp}°C."
    ),
    "snow_reason_wet": "Wet snow: daytime temperature above freezing ({max_temp}°C).",
    "snow_reason_refrozen": (
        "Refrozen surface: melt {hours_since_melt} hours ago followed by "
        "freezing ({avg_temp}°C), no new snow cover since."
    ),
    "snow_reason_recent_snow": "Recent snowfall {hours} hours ago, still new snow.",
    "snow_reason_recent_moist_snow": (
        "Recent snowfall {hours} hours ago in moist conditions near 0°C."
    ),
    "snow_reason_light_snow": "Light snow ({snowfall}cm) refreshed the surface.",
    "snow_reason_light_moist_snow": (
        "Light snow ({snowfall}cm) near 0°C: moist fine-grained surface."
    ),
    "snow_reason_transformed_moist": (
        "Near 0°C ({max_temp}°C) with {humidity}% humidity: transformed moist "
        "fine-grained snow."
    ),
    "snow_reason_moist_fine": "Near 0°C ({max_temp}°C): moist fine-grained snow.",
    "snow_reason_fine_grained": (
        "No significant snow for {hours} hours: fine-grained development."
    ),
    "snow_reason_old_grained": (
        "{days} days without significant snow: old, rounded grains."
    ),
}


class _MissingParams(dict):
    """Render missing template parameters as a placeholder."""

    def __missing__(self, key):
        return "?"


def explain_reason(result: AssessmentResult | SnowSurfaceAssessment) -> str:
    """Render the reason for an assessment as an English sentence.

    Unknown reason keys are returned unchanged so new rules still surface
    something readable.
    """
    if isinstance(result, SnowSurfaceAssessment):
        result = result.result

    template = REASON_TEMPLATES.get(result.reason_key)
    if template is None:
        return result.reason_key
    return template.format_map(_MissingParams(result.reason_params))
