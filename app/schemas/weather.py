from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.weather import WeatherSummary


class WeatherSummaryResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    city: str
    average_temperature: float
    hottest_day: str | None = None
    coldest_day: str | None = None

    @classmethod
    def from_summary(cls, summary: WeatherSummary) -> WeatherSummaryResponse:
        return cls(
            city=summary.city,
            average_temperature=summary.average_temperature,
            hottest_day=summary.hottest_day,
            coldest_day=summary.coldest_day,
        )


class ErrorResponse(BaseModel):
    error: str = Field(min_length=1)
