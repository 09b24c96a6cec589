from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)

    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    trusted_hosts: list[str] = Field(default_factory=list)

    openweather_base_url: AnyHttpUrl = Field(default="https://api.openweathermap.org")
    openweather_api_key: str = Field(min_length=1)
    openweather_timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)
    openweather_user_agent: str = Field(
        default="weather-summary-api/0.1",
        min_length=3,
        max_length=256,
    )

    weather_worker_threads: int = Field(default=8, ge=1, le=64)
    summary_cache_max_entries: int = Field(default=1024, ge=1, le=100_000)
    summary_cache_ttl_seconds: float = Field(default=600.0, ge=0.0, le=86_400.0)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    return Settings()
