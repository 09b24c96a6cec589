"""Failure taxonomy for weather summaries.

Lower layers raise the exceptions below; the service converts them into a
``SummaryFailure`` so the HTTP layer only has to switch on ``ErrorKind``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    EXTERNAL_FAILURE = "external_failure"
    OTHER = "other"


@dataclass(frozen=True)
class SummaryFailure:
    kind: ErrorKind
    message: str
    cause: BaseException | None = None


class WeatherError(Exception):
    """Base class for errors raised while building a weather summary."""


class CityNotFound(WeatherError):
    def __init__(self, city: str) -> None:
        super().__init__(f"City not found: {city}")
        self.city = city


class ExternalApiFailure(WeatherError):
    """The forecast provider could not be reached or answered with an error."""

    def __init__(self, city: str, cause: BaseException) -> None:
        super().__init__(f"Error fetching data for city: {city}")
        self.city = city
        self.cause = cause


class MalformedResponse(WeatherError):
    """The provider answered with a document we cannot aggregate."""


class EmptyForecastError(MalformedResponse):
    def __init__(self, city: str) -> None:
        super().__init__(f"Forecast for {city!r} contained no entries")
        self.city = city


def classify_failure(exc: BaseException) -> SummaryFailure:
    if isinstance(exc, CityNotFound):
        return SummaryFailure(kind=ErrorKind.NOT_FOUND, message=str(exc), cause=exc)
    if isinstance(exc, ExternalApiFailure):
        return SummaryFailure(
            kind=ErrorKind.EXTERNAL_FAILURE, message=str(exc), cause=exc.cause
        )
    return SummaryFailure(kind=ErrorKind.OTHER, message=GENERIC_ERROR_MESSAGE, cause=exc)
