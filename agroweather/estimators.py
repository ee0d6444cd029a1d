"""Heuristic UV-index and soil-moisture estimates.

The weather provider supplies neither figure on the free tier, so both are
derived from what it does supply. These are fixed rules of thumb, not
physical models, and their outputs are part of the dashboard contract: keep
the constants as they are.
"""
from __future__ import annotations

from agroweather.conditions import is_precipitating
from agroweather.domain import SoilMoistureStatus
from agroweather.numeric import clamp, round_half_up

CLEAR_SKY_UV = 5.0
# Full overcast removes at most this share of the clear-sky value.
MAX_CLOUD_ATTENUATION = 0.75
PRECIPITATION_UV_FACTOR = 0.3

SOIL_BASELINE_PCT = 40.0
SOIL_RAIN_WEIGHT = 20.0
SOIL_HUMIDITY_MIDPOINT = 50.0
SOIL_HUMIDITY_WEIGHT = 0.2
SOIL_TEMPERATURE_BASELINE_C = 20.0
SOIL_TEMPERATURE_WEIGHT = 0.5

SOIL_LOW_THRESHOLD_PCT = 30.0
SOIL_HIGH_THRESHOLD_PCT = 70.0

SOIL_ADVICE = {
    SoilMoistureStatus.LOW: "Soil moisture levels are low. Consider irrigation for optimal crop health.",
    SoilMoistureStatus.HIGH: "Soil moisture levels are high. Monitor drainage to prevent waterlogging.",
    SoilMoistureStatus.OPTIMAL: "Soil moisture levels are optimal for most crops.",
}


def estimate_uv_index(condition_code: int, cloud_coverage_pct: float) -> float:
    """
    Estimate the UV index from the sky condition and cloud cover.

    Starts from a clear-sky value of 5.0, scales it down linearly with cloud
    cover (to 25% at full overcast), and cuts it to 30% while it is raining,
    snowing or storming. The result is rounded to one decimal but not
    clamped; bounded inputs keep it within [0, 5].
    """
    uv = CLEAR_SKY_UV * (1 - (cloud_coverage_pct / 100) * MAX_CLOUD_ATTENUATION)
    if is_precipitating(condition_code):
        uv *= PRECIPITATION_UV_FACTOR
    return round_half_up(uv, 1)


def estimate_soil_moisture(rain_amount: float, humidity_pct: float, temperature_c: float) -> float:
    """
    Estimate topsoil moisture as a percentage in [0, 100].

    `rain_amount` is used as-is: callers pass last-hour rainfall in mm for
    current conditions, or the day's peak precipitation probability as a
    0-1 fraction for forecast days.
    """
    moisture = SOIL_BASELINE_PCT
    moisture += rain_amount * SOIL_RAIN_WEIGHT
    moisture += (humidity_pct - SOIL_HUMIDITY_MIDPOINT) * SOIL_HUMIDITY_WEIGHT
    moisture -= (temperature_c - SOIL_TEMPERATURE_BASELINE_C) * SOIL_TEMPERATURE_WEIGHT
    return clamp(moisture, 0.0, 100.0)


def classify_soil_moisture(moisture_pct: float) -> SoilMoistureStatus:
    """Band a soil-moisture estimate into low / optimal / high."""
    if moisture_pct < SOIL_LOW_THRESHOLD_PCT:
        return SoilMoistureStatus.LOW
    if moisture_pct > SOIL_HIGH_THRESHOLD_PCT:
        return SoilMoistureStatus.HIGH
    return SoilMoistureStatus.OPTIMAL
