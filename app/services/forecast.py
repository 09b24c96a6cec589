from __future__ import annotations

import pydantic

from app.core.errors import EmptyForecastError, MalformedResponse
from app.models.weather import ForecastEntry, WeatherSummary


class ForecastCity(pydantic.BaseModel):
    name: str


class ForecastMain(pydantic.BaseModel):
    temp: float = pydantic.Field(allow_inf_nan=False)


class ForecastItem(pydantic.BaseModel):
    dt_txt: str
    main: ForecastMain


class ForecastResponse(pydantic.BaseModel):
    city: ForecastCity
    entries: list[ForecastItem] = pydantic.Field(alias="list")


def parse_forecast(raw: str) -> tuple[str, list[ForecastEntry]]:
    try:
        payload = ForecastResponse.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise MalformedResponse("Unexpected forecast response shape") from e

    entries = [
        ForecastEntry(timestamp_text=item.dt_txt, temperature_kelvin=item.main.temp)
        for item in payload.entries
    ]
    return payload.city.name, entries


def summarize_entries(city: str, entries: list[ForecastEntry]) -> WeatherSummary:
    """Reduce forecast entries to average, hottest and coldest day.

    Temperatures are reported in Celsius. Ties on the extremes keep the
    first entry in scan order.
    """
    if not entries:
        raise EmptyForecastError(city)

    total = 0.0
    max_temp: float | None = None
    min_temp: float | None = None
    hottest_day: str | None = None
    coldest_day: str | None = None

    for entry in entries:
        temp = entry.temperature_celsius
        date = entry.date
        total += temp
        if max_temp is None or temp > max_temp:
            max_temp = temp
            hottest_day = date
        if min_temp is None or temp < min_temp:
            min_temp = temp
            coldest_day = date

    return WeatherSummary(
        city=city,
        average_temperature=total / len(entries),
        hottest_day=hottest_day,
        coldest_day=coldest_day,
    )


def aggregate(raw: str) -> WeatherSummary:
    city, entries = parse_forecast(raw)
    return summarize_entries(city, entries)
