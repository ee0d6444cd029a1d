import pytest

from agroweather.conditions import classify_condition, is_precipitating
from agroweather.domain import ConditionCategory


@pytest.mark.parametrize(
    "code, expected",
    [
        (200, ConditionCategory.THUNDERSTORM),
        (250, ConditionCategory.THUNDERSTORM),
        (300, ConditionCategory.DRIZZLE),
        (399, ConditionCategory.DRIZZLE),
        (500, ConditionCategory.RAIN),
        (600, ConditionCategory.SNOW),
        (741, ConditionCategory.ATMOSPHERE),
        (800, ConditionCategory.CLEAR),
        (801, ConditionCategory.CLOUDS),
        (804, ConditionCategory.CLOUDS),
        (899, ConditionCategory.CLOUDS),
    ],
)
def test_classify_known_ranges(code, expected):
    assert classify_condition(code) == expected


@pytest.mark.parametrize("code", [0, 199, 400, 450, 499, 900, 1000, -1])
def test_classify_outside_ranges_is_unknown(code):
    assert classify_condition(code) == ConditionCategory.UNKNOWN


def test_precipitating_band_spans_thunderstorm_to_snow():
    assert is_precipitating(200)
    assert is_precipitating(450)  # gap code still attenuates UV
    assert is_precipitating(699)
    assert not is_precipitating(700)
    assert not is_precipitating(800)
