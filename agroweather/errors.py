"""Exceptions raised around the weather aggregation core."""


class WeatherDataError(Exception):
    """Base class for weather input and retrieval failures."""


class EmptyInputError(WeatherDataError):
    """The upstream provider returned no forecast steps at all.

    The aggregation core never raises this; an empty input simply yields an
    empty list. The service layer raises it when a caller needs data.
    """


class MalformedSampleError(WeatherDataError, ValueError):
    """A sample is missing a required field or carries a non-finite number."""

    def __init__(self, field: str, value: object, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for {field}: {value!r}")


class UpstreamUnavailableError(WeatherDataError):
    """The weather provider could not be reached or answered unusably."""
