"""Errors raised by the snowpack classification engine."""


class SnowpackError(Exception):
    """Base class for snowpack errors."""

    pass


class NoApplicableRuleError(SnowpackError):
    """The configured rule chain has no rule matching a data point.

    This is an engine configuration defect: a correctly configured chain ends
    with a catch-all rule. It should not be retried.
    """

    def __init__(self, step_index: int | None = None):
        self.step_index = step_index
        if step_index is None:
            message = "No classification rule applies"
        else:
            message = f"No classification rule applies to data point {step_index}"
        super().__init__(message)


class EmptySeriesError(SnowpackError):
    """A current-state accessor was queried on an empty weather series."""

    def __init__(self, message: str = "Weather series is empty"):
        super().__init__(message)


class ConfigurationError(SnowpackError):
    """Configuration values could not be parsed."""

    pass
