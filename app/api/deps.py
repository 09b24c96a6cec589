from __future__ import annotations

from concurrent.futures import Executor
from typing import Annotated

from fastapi import Depends, Request

from app.clients.openweather import OpenWeatherClient
from app.services.weather import ForecastFetcher, SummaryCache, WeatherSummaryService


def get_openweather_client(request: Request) -> ForecastFetcher:
    client = getattr(request.app.state, "openweather_client", None)
    if not isinstance(client, OpenWeatherClient):
        raise RuntimeError("OpenWeather client is not initialised")
    return client


def get_summary_cache(request: Request) -> SummaryCache:
    return request.app.state.summary_cache


def get_weather_executor(request: Request) -> Executor:
    return request.app.state.weather_executor


def get_weather_service(
    fetcher: Annotated[ForecastFetcher, Depends(get_openweather_client)],
    cache: Annotated[SummaryCache, Depends(get_summary_cache)],
) -> WeatherSummaryService:
    return WeatherSummaryService(fetcher=fetcher, cache=cache)
