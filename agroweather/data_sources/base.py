"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from agroweather.samples import CurrentConditions, IntervalSample


class WeatherDataSource(Protocol):
    """Interface for anything that can provide current conditions and forecast steps."""

    def fetch_current_conditions(self, latitude: float, longitude: float) -> CurrentConditions:
        """Return the latest observation."""
        ...

    def fetch_interval_samples(self, latitude: float, longitude: float) -> List[IntervalSample]:
        """Return the forecast series in chronological order."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap two callables so providers can be swapped or faked in tests."""

    current: Callable[..., CurrentConditions]
    forecast: Callable[..., List[IntervalSample]]

    def fetch_current_conditions(self, *args, **kwargs) -> CurrentConditions:
        """Delegate to the configured current-conditions callable."""
        return self.current(*args, **kwargs)

    def fetch_interval_samples(self, *args, **kwargs) -> List[IntervalSample]:
        """Delegate to the configured forecast callable."""
        return self.forecast(*args, **kwargs)
