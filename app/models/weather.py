from __future__ import annotations

from dataclasses import dataclass

KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class ForecastEntry:
    timestamp_text: str
    temperature_kelvin: float

    @property
    def date(self) -> str:
        # "2024-01-15 12:00:00" -> "2024-01-15"
        return self.timestamp_text.split(" ", 1)[0]

    @property
    def temperature_celsius(self) -> float:
        return self.temperature_kelvin - KELVIN_OFFSET


@dataclass(frozen=True)
class WeatherSummary:
    city: str
    average_temperature: float
    hottest_day: str | None
    coldest_day: str | None
