from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import Settings
from app.factory import create_app
from tests.fakes import FakeForecastFetcher, forecast_payload

LONDON_FORECAST = forecast_payload(
    "London",
    [
        ("2024-01-15 12:00:00", 288.15),
        ("2024-01-16 12:00:00", 293.15),
        ("2024-01-17 12:00:00", 283.15),
    ],
)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        log_level="WARNING",
        cors_origins=["*"],
        trusted_hosts=["testserver", "localhost"],
        openweather_base_url="http://openweather.test",
        openweather_api_key="test-api-key",
        openweather_timeout_seconds=1.0,
        openweather_user_agent="test-agent",
        weather_worker_threads=2,
        summary_cache_max_entries=16,
        summary_cache_ttl_seconds=0,
    )


@pytest.fixture()
def fetcher() -> FakeForecastFetcher:
    return FakeForecastFetcher(
        {
            "London": LONDON_FORECAST,
            "LONDON": LONDON_FORECAST,
        }
    )


@pytest.fixture()
def client(settings: Settings, fetcher: FakeForecastFetcher) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_openweather_client] = lambda: fetcher
    with TestClient(app) as client:
        yield client
