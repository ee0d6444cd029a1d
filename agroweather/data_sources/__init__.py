"""Data source factories for plugging different weather backends."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .openweather_client import (
    fetch_current_conditions,
    fetch_interval_samples,
    parse_current_conditions,
    parse_interval_samples,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "fetch_current_conditions",
    "fetch_interval_samples",
    "parse_current_conditions",
    "parse_interval_samples",
]
