"""Map OpenWeatherMap condition codes onto sky-condition categories."""
from __future__ import annotations

from agroweather.domain import ConditionCategory

# Half-open [start, end) code ranges. 400-499 is intentionally unassigned.
CONDITION_RANGES: tuple[tuple[int, int, ConditionCategory], ...] = (
    (200, 300, ConditionCategory.THUNDERSTORM),
    (300, 400, ConditionCategory.DRIZZLE),
    (500, 600, ConditionCategory.RAIN),
    (600, 700, ConditionCategory.SNOW),
    (700, 800, ConditionCategory.ATMOSPHERE),
    (800, 801, ConditionCategory.CLEAR),
    (801, 900, ConditionCategory.CLOUDS),
)

# Thunderstorm through snow: everything that actively precipitates.
PRECIPITATING_CODES = range(200, 700)


def classify_condition(code: int) -> ConditionCategory:
    """Return the category for a provider condition code; never raises."""
    for start, end, category in CONDITION_RANGES:
        if start <= code < end:
            return category
    return ConditionCategory.UNKNOWN


def is_precipitating(code: int) -> bool:
    """True when the code describes thunderstorm, drizzle, rain or snow."""
    return code in PRECIPITATING_CODES
