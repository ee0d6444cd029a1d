"""Raw weather records handed to the aggregation core by a data source."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Union

# Aware datetime, or seconds / milliseconds since the Unix epoch.
Timestamp = Union[dt.datetime, int, float]


@dataclass
class IntervalSample:
    """One forecast step (3 hours wide for the OpenWeatherMap forecast)."""
    timestamp: Timestamp
    temperature_c: Optional[float]
    humidity_pct: Optional[float]
    precipitation_probability: Optional[float]  # 0.0-1.0
    wind_speed: Optional[float]
    cloud_coverage_pct: Optional[float]
    condition_code: Optional[int]
    condition_text: Optional[str] = None


@dataclass
class CurrentConditions:
    """Latest observation for the farm location."""
    timestamp: Timestamp
    temperature_c: Optional[float]
    humidity_pct: Optional[float]
    wind_speed: Optional[float]
    cloud_coverage_pct: Optional[float]
    condition_code: Optional[int]
    condition_text: Optional[str] = None
    rain_last_hour_mm: Optional[float] = 0.0
