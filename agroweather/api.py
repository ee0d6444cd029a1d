"""HTTP API for the farm weather dashboard."""

import hmac
from typing import Dict, List, NoReturn, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from .config import settings
from .data_sources import build_data_source
from .domain import AgriculturalOutlook, CurrentSnapshot, DailyAggregate
from .errors import (
    EmptyInputError,
    MalformedSampleError,
    UpstreamUnavailableError,
    WeatherDataError,
)
from .weather_service import get_agricultural_outlook, get_current_snapshot, get_daily_forecast
from agroutils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="agroweather/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(prefix="/weather", dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class CurrentResponse(BaseModel):
    """Current-conditions envelope."""
    success: bool = True
    data: CurrentSnapshot
    display: Optional[Dict[str, str]] = None


class DailyForecast(BaseModel):
    """Forecast payload body."""
    daily: List[DailyAggregate]


class ForecastResponse(BaseModel):
    """Daily forecast envelope."""
    success: bool = True
    data: DailyForecast


class AgriculturalResponse(BaseModel):
    """Agricultural outlook envelope."""
    success: bool = True
    data: AgriculturalOutlook


def _raise_http_error(exc: WeatherDataError, what: str) -> NoReturn:
    """Map weather errors onto HTTP status codes."""
    if isinstance(exc, EmptyInputError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, MalformedSampleError):
        code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, UpstreamUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error(f"Failed to fetch {what}: {exc}")
    raise HTTPException(status_code=code, detail=f"Failed to fetch {what}: {exc}") from exc


@router.get("/current", response_model=CurrentResponse)
def current_weather():
    """Current conditions with an estimated UV index."""
    try:
        snapshot = get_current_snapshot(data_source=DATA_SOURCE)
    except WeatherDataError as exc:
        _raise_http_error(exc, "weather data")
    return CurrentResponse(data=snapshot, display=snapshot.to_display_strings())


@router.get("/forecast", response_model=ForecastResponse)
def weather_forecast():
    """Daily forecast summaries built from the 3 hour forecast steps."""
    try:
        daily = get_daily_forecast(data_source=DATA_SOURCE)
    except WeatherDataError as exc:
        _raise_http_error(exc, "weather forecast")
    return ForecastResponse(data=DailyForecast(daily=daily))


@router.get("/agricultural", response_model=AgriculturalResponse)
def agricultural_weather():
    """Current and daily figures with soil moisture estimates and farm advice."""
    try:
        outlook = get_agricultural_outlook(data_source=DATA_SOURCE)
    except WeatherDataError as exc:
        _raise_http_error(exc, "agricultural weather data")
    return AgriculturalResponse(data=outlook)
