from __future__ import annotations

import httpx
import structlog

from app.core.errors import ExternalApiFailure

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
FORECAST_PATH = "/data/2.5/forecast"

logger = structlog.get_logger()


class OpenWeatherClient:
    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        user_agent: str,
        base_url: str = OPENWEATHER_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_forecast(self, city: str) -> str:
        """Return the raw five-day forecast document for ``city``.

        The city is sent as given. An empty string is returned when the
        provider answers with an empty body; transport errors and non-2xx
        statuses are raised as ``ExternalApiFailure``.
        """
        logger.debug("openweather.fetch", city=city)
        try:
            resp = self._client.get(
                FORECAST_PATH, params={"q": city, "appid": self._api_key}
            )
            resp.raise_for_status()
            return resp.text
        except httpx.HTTPError as e:
            # The request URL carries the api key, so only the error type is logged.
            status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            logger.warning(
                "openweather.fetch_failed",
                city=city,
                error_type=type(e).__name__,
                status_code=status_code,
            )
            raise ExternalApiFailure(city, e) from e
