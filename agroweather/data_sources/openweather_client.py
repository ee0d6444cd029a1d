"""Helpers for fetching current conditions and the 5 day / 3 hour forecast from OpenWeatherMap."""
from __future__ import annotations

from typing import Any, List, Optional

import requests
import requests_cache
from retry_requests import retry

from agroweather.errors import UpstreamUnavailableError
from agroweather.samples import CurrentConditions, IntervalSample
from agroutils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="openweather_client")

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
# Matches the dashboard's 30 minute refresh interval.
CACHE_EXPIRE_SECONDS = 1800

cache_session = requests_cache.CachedSession(".cache", expire_after=CACHE_EXPIRE_SECONDS)
session = retry(cache_session, retries=5, backoff_factor=0.2)


def _first_weather(entry: dict) -> dict:
    """Return the primary weather condition block of an entry, or an empty dict."""
    weather = entry.get("weather") or []
    return weather[0] if weather else {}


def _get_json(url: str, params: dict, *, timeout: int) -> dict:
    """GET a JSON document, translating transport failures into UpstreamUnavailableError."""
    if not params.get("appid"):
        raise UpstreamUnavailableError("OpenWeatherMap API key is not configured")
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as exc:
        logger.error("OpenWeatherMap request failed", extra={"url": url, "error": str(exc)})
        raise UpstreamUnavailableError(f"OpenWeatherMap request failed: {exc}") from exc
    except ValueError as exc:
        raise UpstreamUnavailableError("OpenWeatherMap returned invalid JSON") from exc


def parse_current_conditions(data: dict) -> CurrentConditions:
    """Convert a /weather payload into CurrentConditions.

    Missing numbers are left as None; the aggregation core decides whether the
    record is usable.
    """
    if "dt" not in data or "main" not in data:
        raise UpstreamUnavailableError("OpenWeatherMap current payload is missing 'dt' or 'main'")
    main = data.get("main") or {}
    weather = _first_weather(data)
    rain = data.get("rain") or {}
    return CurrentConditions(
        timestamp=data["dt"],
        temperature_c=main.get("temp"),
        humidity_pct=main.get("humidity"),
        wind_speed=(data.get("wind") or {}).get("speed"),
        cloud_coverage_pct=(data.get("clouds") or {}).get("all"),
        condition_code=weather.get("id"),
        condition_text=weather.get("description"),
        rain_last_hour_mm=rain.get("1h", 0.0),
    )


def parse_interval_samples(data: dict) -> List[IntervalSample]:
    """Convert a /forecast payload into IntervalSamples, one per 3 hour step."""
    entries: Optional[List[Any]] = data.get("list")
    if entries is None:
        raise UpstreamUnavailableError("OpenWeatherMap forecast payload is missing 'list'")

    out: List[IntervalSample] = []
    for entry in entries:
        main = entry.get("main") or {}
        weather = _first_weather(entry)
        out.append(
            IntervalSample(
                timestamp=entry.get("dt"),
                temperature_c=main.get("temp"),
                humidity_pct=main.get("humidity"),
                precipitation_probability=entry.get("pop"),
                wind_speed=(entry.get("wind") or {}).get("speed"),
                cloud_coverage_pct=(entry.get("clouds") or {}).get("all"),
                condition_code=weather.get("id"),
                condition_text=weather.get("description"),
            )
        )
    return out


def fetch_current_conditions(
    latitude: float,
    longitude: float,
    *,
    api_key: str | None,
    base_url: str = OPENWEATHER_BASE_URL,
    units: str = "metric",
    timeout: int = 10,
) -> CurrentConditions:
    """Fetch the latest observation for the given coordinates."""
    params = {"lat": latitude, "lon": longitude, "appid": api_key, "units": units}
    data = _get_json(f"{base_url}/weather", params, timeout=timeout)
    return parse_current_conditions(data)


def fetch_interval_samples(
    latitude: float,
    longitude: float,
    *,
    api_key: str | None,
    base_url: str = OPENWEATHER_BASE_URL,
    units: str = "metric",
    timeout: int = 10,
) -> List[IntervalSample]:
    """Fetch the 5 day / 3 hour forecast for the given coordinates."""
    params = {"lat": latitude, "lon": longitude, "appid": api_key, "units": units}
    data = _get_json(f"{base_url}/forecast", params, timeout=timeout)
    samples = parse_interval_samples(data)
    logger.debug("Fetched forecast steps", extra={"count": len(samples)})
    return samples
