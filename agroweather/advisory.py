"""Plain-language farm guidance built on top of the derived weather metrics."""
from __future__ import annotations

from agroweather.domain import (
    ConditionCategory,
    CurrentSnapshot,
    DailyAggregate,
    FarmAdvice,
)
from agroweather.estimators import SOIL_ADVICE, classify_soil_moisture

WET_CONDITIONS = {
    ConditionCategory.RAIN,
    ConditionCategory.DRIZZLE,
    ConditionCategory.THUNDERSTORM,
}
HEAT_STRESS_C = 32.0
HIGH_PRECIPITATION_PCT = 50
HIGH_UV_INDEX = 8.0

HIGH_UV_NOTE = "High UV index. Consider providing shade for sensitive crops and limiting midday field work."
RECENT_RAIN_NOTE = "Recent precipitation detected. Consider adjusting irrigation schedules accordingly."


def weather_advice(current: CurrentSnapshot, today: DailyAggregate | None = None) -> str:
    """Pick the first matching field-work recommendation for the day."""
    precip_pct = today.precipitation_probability_pct if today else 0
    if current.condition in WET_CONDITIONS or precip_pct > HIGH_PRECIPITATION_PCT:
        return "Consider delaying outdoor farm activities. Ensure proper drainage systems are working."
    if current.temperature_c > HEAT_STRESS_C:
        return ("High temperatures may stress crops. Ensure adequate irrigation and consider "
                "shade for sensitive plants.")
    # Unreachable with the heuristic UV estimate (max 5.0), kept for measured UV feeds.
    if current.uv_index > HIGH_UV_INDEX:
        return "High UV levels today. Consider working in early morning or late afternoon."
    return "Weather conditions are favorable for most farm activities today."


def advisory_notes(current: CurrentSnapshot) -> list[str]:
    """Extra notes shown under the soil advice, in display order."""
    notes = []
    if current.uv_index > HIGH_UV_INDEX:
        notes.append(HIGH_UV_NOTE)
    if current.precipitation_mm > 0:
        notes.append(RECENT_RAIN_NOTE)
    return notes


def build_farm_advice(current: CurrentSnapshot, today: DailyAggregate | None = None) -> FarmAdvice:
    """Combine weather and soil guidance; soil advice needs a soil estimate."""
    weather = weather_advice(current, today)
    notes = advisory_notes(current)
    if current.soil_moisture_pct is None:
        return FarmAdvice(weather=weather, notes=notes)
    status = classify_soil_moisture(current.soil_moisture_pct)
    return FarmAdvice(weather=weather, soil_status=status, soil=SOIL_ADVICE[status], notes=notes)
