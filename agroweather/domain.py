"""Output vocabulary for day-level agricultural weather indicators.

Enums and strict Pydantic models for everything the aggregation core hands to
the HTTP layer. No estimation logic lives here.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from agroweather.numeric import round_half_up


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class ConditionCategory(str, Enum):
    """Human sky-condition category for a provider condition code."""
    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    ATMOSPHERE = "Atmosphere"
    CLEAR = "Clear"
    CLOUDS = "Clouds"
    UNKNOWN = "Unknown"


class SoilMoistureStatus(str, Enum):
    """Coarse band of an estimated soil-moisture percentage."""
    LOW = "low"
    OPTIMAL = "optimal"
    HIGH = "high"


class DailyAggregate(_StrictBaseModel):
    """Summary of one calendar day of forecast steps."""
    date: dt.date
    temperature_min_c: int
    temperature_max_c: int
    humidity_pct: int
    precipitation_probability_pct: int
    wind_speed: float
    condition: ConditionCategory
    description: str
    uv_index: float
    soil_moisture_pct: float | None = Field(default=None, ge=0.0, le=100.0)


class CurrentSnapshot(_StrictBaseModel):
    """Current conditions plus the metrics the provider does not supply."""
    temperature_c: float
    humidity_pct: float
    condition: ConditionCategory
    description: str
    wind_speed: float
    precipitation_mm: float = 0.0
    uv_index: float
    soil_moisture_pct: float | None = Field(default=None, ge=0.0, le=100.0)
    observed_at: dt.datetime

    def to_display_strings(self) -> dict:
        """Rounded, unit-suffixed values for dashboards."""
        out = {
            "observed_at": self.observed_at.isoformat(),
            "temperature": f"{round_half_up(self.temperature_c):.0f} °C",
            "humidity": f"{self.humidity_pct:.0f} %",
            "condition": self.condition.value,
            "description": self.description,
            "wind_speed": f"{self.wind_speed:.1f} m/s",
            "precipitation": f"{self.precipitation_mm:.1f} mm",
            "uv_index": f"{self.uv_index:.1f}",
        }
        if self.soil_moisture_pct is not None:
            out["soil_moisture"] = f"{self.soil_moisture_pct:.1f} %"
        return out


class FarmAdvice(_StrictBaseModel):
    """Plain-language guidance derived from the snapshot and today's outlook."""
    weather: str
    soil_status: SoilMoistureStatus | None = None
    soil: str | None = None
    notes: List[str] = Field(default_factory=list)


class AgriculturalOutlook(_StrictBaseModel):
    """Current snapshot and daily forecast with soil moisture on every record."""
    current: CurrentSnapshot
    forecast: List[DailyAggregate] = Field(default_factory=list)
    advice: FarmAdvice | None = None
