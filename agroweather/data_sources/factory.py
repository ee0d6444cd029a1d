"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from functools import partial

from agroweather import config
from agroweather.data_sources.base import CallableWeatherDataSource, WeatherDataSource
from agroweather.data_sources.openweather_client import (
    fetch_current_conditions,
    fetch_interval_samples,
)
from agroutils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "openweather"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_SOURCE_NAME).lower()

    if source == "openweather":
        if not settings.openweather_api_key:
            logger.warning("AGRO_OPENWEATHER_API_KEY is not set; weather requests will fail")
        client_kwargs = {
            "api_key": settings.openweather_api_key,
            "base_url": settings.openweather_base_url,
            "units": settings.units,
            "timeout": settings.request_timeout_seconds,
        }
        logger.info("Using OpenWeatherMap data source", extra={"base_url": settings.openweather_base_url})
        return CallableWeatherDataSource(
            current=partial(fetch_current_conditions, **client_kwargs),
            forecast=partial(fetch_interval_samples, **client_kwargs),
        )

    raise ValueError(f"Unknown weather source '{source}'")
