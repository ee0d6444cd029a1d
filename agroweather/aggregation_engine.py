"""Deterministic daily aggregation of forecast steps and current-conditions snapshots.

Turns the provider's flat 3-hourly series into one DailyAggregate per calendar
day, and a single current-conditions record into a CurrentSnapshot, adding the
UV-index and soil-moisture estimates the provider does not supply. Everything
here is a pure function of its arguments (apart from the snapshot clock) and
safe to call concurrently.
"""

from __future__ import annotations

import datetime as dt
from collections import Counter
from typing import Any, Hashable, Iterable, Mapping, Sequence
from zoneinfo import ZoneInfo

from agroweather.advisory import build_farm_advice
from agroweather.conditions import classify_condition
from agroweather.domain import AgriculturalOutlook, CurrentSnapshot, DailyAggregate
from agroweather.errors import MalformedSampleError
from agroweather.estimators import estimate_soil_moisture, estimate_uv_index
from agroweather.numeric import is_finite_number, round_half_up
from agroutils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="aggregation_engine")

# Epoch values above this are taken to be milliseconds (year ~5138 in seconds).
_EPOCH_MILLIS_THRESHOLD = 1e11

_REQUIRED_NUMERIC = ("temperature_c", "humidity_pct", "cloud_coverage_pct", "wind_speed")


def _get_field(record: Any, key: str, default=None):
    """Support attribute, dict, or Mapping access for weather records."""
    if record is None:
        return default
    if isinstance(record, Mapping):
        return record.get(key, default)
    return getattr(record, key, default)


def to_utc_instant(timestamp: Any) -> dt.datetime:
    """Normalize a datetime or epoch seconds/milliseconds into an aware UTC datetime."""
    if isinstance(timestamp, dt.datetime):
        if timestamp.tzinfo is None:
            # Naive values are treated as UTC, which is what the provider sends.
            return timestamp.replace(tzinfo=dt.timezone.utc)
        return timestamp.astimezone(dt.timezone.utc)
    if is_finite_number(timestamp):
        seconds = timestamp / 1000 if abs(timestamp) > _EPOCH_MILLIS_THRESHOLD else timestamp
        try:
            return dt.datetime.fromtimestamp(seconds, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise MalformedSampleError("timestamp", timestamp) from exc
    raise MalformedSampleError("timestamp", timestamp)


def day_key(timestamp: Any, tz: str = "UTC") -> dt.date:
    """Calendar date of an instant, with midnight taken in the `tz` zone."""
    return to_utc_instant(timestamp).astimezone(ZoneInfo(tz)).date()


def validate_sample(record: Any, *, require_precipitation: bool = True) -> None:
    """
    Raise MalformedSampleError if the record cannot be aggregated safely.

    Numeric fields must be present and finite so NaN never leaks into a daily
    mean; the condition code must be an integer.
    """
    to_utc_instant(_get_field(record, "timestamp"))

    fields = _REQUIRED_NUMERIC + (("precipitation_probability",) if require_precipitation else ())
    for field in fields:
        value = _get_field(record, field)
        if not is_finite_number(value):
            raise MalformedSampleError(field, value)

    code = _get_field(record, "condition_code")
    if isinstance(code, bool) or not isinstance(code, int):
        raise MalformedSampleError("condition_code", code)


def filter_valid_samples(samples: Iterable[Any]) -> list[Any]:
    """Drop malformed forecast steps, logging each rejection."""
    valid: list[Any] = []
    for index, sample in enumerate(samples):
        try:
            validate_sample(sample)
        except MalformedSampleError as exc:
            logger.warning(
                "Skipping malformed forecast sample",
                extra={"index": index, "field": exc.field, "value": repr(exc.value)},
            )
            continue
        valid.append(sample)
    return valid


def group_by_day(samples: Iterable[Any], tz: str = "UTC") -> dict[dt.date, list[Any]]:
    """
    Bucket samples by calendar date in the order dates are first seen.

    Dates are not sorted: chronological input gives chronological buckets.
    """
    buckets: dict[dt.date, list[Any]] = {}
    for sample in samples:
        buckets.setdefault(day_key(_get_field(sample, "timestamp"), tz), []).append(sample)
    return buckets


def most_common(values: Iterable[Hashable]):
    """Most frequent value; ties go to the value encountered first."""
    # Counter.most_common keeps first-encountered order among equal counts.
    counts = Counter(values)
    if not counts:
        raise ValueError("most_common() of an empty sequence")
    return counts.most_common(1)[0][0]


def _mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    return sum(values) / len(values)


def aggregate_day(
    bucket: Sequence[Any],
    *,
    day: dt.date | None = None,
    agricultural: bool = False,
    tz: str = "UTC",
) -> DailyAggregate:
    """
    Reduce one day's samples to a DailyAggregate.

    The plain forecast estimates UV from the day's dominant condition with no
    cloud cover, since cloud is not aggregated per day. The agricultural
    variant averages per-sample UV estimates and adds a soil-moisture
    estimate from the peak precipitation risk and mean humidity/temperature.
    """
    if not bucket:
        raise ValueError("aggregate_day() requires at least one sample")

    if day is None:
        day = day_key(_get_field(bucket[0], "timestamp"), tz)

    temps = [_get_field(s, "temperature_c") for s in bucket]
    humidity = [_get_field(s, "humidity_pct") for s in bucket]
    wind = [_get_field(s, "wind_speed") for s in bucket]
    precip_pct = [_get_field(s, "precipitation_probability") * 100 for s in bucket]
    codes = [_get_field(s, "condition_code") for s in bucket]
    texts = [_get_field(s, "condition_text") or "" for s in bucket]

    dominant_code = most_common(codes)
    mean_humidity = _mean(humidity)
    mean_temp = _mean(temps)
    # Report worst-case precipitation risk for the day, not the average.
    peak_precip_pct = int(round_half_up(max(precip_pct)))

    soil_moisture = None
    if agricultural:
        uv_index = round_half_up(
            _mean([estimate_uv_index(_get_field(s, "condition_code"), _get_field(s, "cloud_coverage_pct"))
                   for s in bucket]),
            1,
        )
        soil_moisture = estimate_soil_moisture(peak_precip_pct / 100, mean_humidity, mean_temp)
    else:
        uv_index = estimate_uv_index(dominant_code, 0)

    return DailyAggregate(
        date=day,
        temperature_min_c=int(round_half_up(min(temps))),
        temperature_max_c=int(round_half_up(max(temps))),
        humidity_pct=int(round_half_up(mean_humidity)),
        precipitation_probability_pct=peak_precip_pct,
        wind_speed=round_half_up(_mean(wind), 1),
        condition=classify_condition(dominant_code),
        description=most_common(texts),
        uv_index=uv_index,
        soil_moisture_pct=soil_moisture,
    )


def aggregate_forecast(
    samples: Iterable[Any],
    *,
    agricultural: bool = False,
    tz: str = "UTC",
) -> list[DailyAggregate]:
    """
    Validate, bucket and aggregate a forecast series into per-day records.

    Empty input gives an empty list. Malformed samples are skipped, and a day
    left with no valid samples is omitted rather than reported with gaps.
    """
    valid = filter_valid_samples(samples)
    days = [
        aggregate_day(bucket, day=day, agricultural=agricultural, tz=tz)
        for day, bucket in group_by_day(valid, tz).items()
    ]
    logger.debug(
        "Aggregated forecast",
        extra={"samples": len(valid), "days": len(days), "agricultural": agricultural},
    )
    return days


def build_current_snapshot(
    current: Any,
    *,
    agricultural: bool = False,
    observed_at: dt.datetime | None = None,
) -> CurrentSnapshot:
    """
    Derive the current snapshot from a single observation.

    A malformed observation cannot be skipped like a forecast step, so the
    MalformedSampleError propagates to the caller.
    """
    validate_sample(current, require_precipitation=False)

    code = _get_field(current, "condition_code")
    temperature = _get_field(current, "temperature_c")
    humidity = _get_field(current, "humidity_pct")
    rain_mm = _get_field(current, "rain_last_hour_mm")
    if not is_finite_number(rain_mm):
        rain_mm = 0.0

    soil_moisture = None
    if agricultural:
        # Rainfall in mm goes straight into the estimator, unnormalised.
        soil_moisture = estimate_soil_moisture(rain_mm, humidity, temperature)

    return CurrentSnapshot(
        temperature_c=temperature,
        humidity_pct=humidity,
        condition=classify_condition(code),
        description=_get_field(current, "condition_text") or "",
        wind_speed=_get_field(current, "wind_speed"),
        precipitation_mm=rain_mm,
        uv_index=estimate_uv_index(code, _get_field(current, "cloud_coverage_pct")),
        soil_moisture_pct=soil_moisture,
        observed_at=observed_at or dt.datetime.now(dt.timezone.utc),
    )


def build_agricultural_outlook(
    current: Any,
    samples: Iterable[Any],
    *,
    tz: str = "UTC",
    observed_at: dt.datetime | None = None,
) -> AgriculturalOutlook:
    """Current snapshot and daily forecast, both carrying soil moisture, plus advice."""
    snapshot = build_current_snapshot(current, agricultural=True, observed_at=observed_at)
    forecast = aggregate_forecast(samples, agricultural=True, tz=tz)
    today = forecast[0] if forecast else None
    return AgriculturalOutlook(
        current=snapshot,
        forecast=forecast,
        advice=build_farm_advice(snapshot, today),
    )
