"""Fetch raw weather for the farm and run it through the aggregation core."""
from __future__ import annotations

from typing import List

from agroweather import config
from agroweather.aggregation_engine import (
    aggregate_forecast,
    build_agricultural_outlook,
    build_current_snapshot,
)
from agroweather.data_sources import WeatherDataSource, build_data_source
from agroweather.domain import AgriculturalOutlook, CurrentSnapshot, DailyAggregate
from agroweather.errors import EmptyInputError
from agroweather.samples import IntervalSample
from agroutils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_service")


def _resolve(
    data_source: WeatherDataSource | None,
    settings: config.Settings | None,
) -> tuple[WeatherDataSource, config.Settings]:
    """Fill in the configured data source and settings when not injected."""
    settings = settings or config.settings
    return data_source or build_data_source(settings), settings


def _fetch_samples(ds: WeatherDataSource, settings: config.Settings) -> List[IntervalSample]:
    """Fetch forecast steps, refusing an entirely empty series."""
    samples = ds.fetch_interval_samples(settings.farm_latitude, settings.farm_longitude)
    if not samples:
        raise EmptyInputError("Weather provider returned no forecast steps")
    return samples


def get_current_snapshot(
    *,
    data_source: WeatherDataSource | None = None,
    settings: config.Settings | None = None,
) -> CurrentSnapshot:
    """Current conditions at the farm with an estimated UV index."""
    ds, settings = _resolve(data_source, settings)
    logger.info(
        "Fetching current conditions",
        extra={"latitude": settings.farm_latitude, "longitude": settings.farm_longitude},
    )
    current = ds.fetch_current_conditions(settings.farm_latitude, settings.farm_longitude)
    return build_current_snapshot(current)


def get_daily_forecast(
    *,
    data_source: WeatherDataSource | None = None,
    settings: config.Settings | None = None,
) -> List[DailyAggregate]:
    """Per-day forecast summary in first-seen date order."""
    ds, settings = _resolve(data_source, settings)
    samples = _fetch_samples(ds, settings)
    daily = aggregate_forecast(samples, tz=settings.day_boundary_timezone)
    logger.info("Computed daily forecast", extra={"steps": len(samples), "days": len(daily)})
    return daily


def get_agricultural_outlook(
    *,
    data_source: WeatherDataSource | None = None,
    settings: config.Settings | None = None,
) -> AgriculturalOutlook:
    """Current snapshot and daily forecast with soil moisture and farm advice."""
    ds, settings = _resolve(data_source, settings)
    current = ds.fetch_current_conditions(settings.farm_latitude, settings.farm_longitude)
    samples = _fetch_samples(ds, settings)
    outlook = build_agricultural_outlook(current, samples, tz=settings.day_boundary_timezone)
    logger.info(
        "Computed agricultural outlook",
        extra={"days": len(outlook.forecast), "soil_moisture_pct": outlook.current.soil_moisture_pct},
    )
    return outlook
