from __future__ import annotations

import asyncio
from concurrent.futures import Executor
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_weather_executor, get_weather_service
from app.core.errors import ErrorKind, SummaryFailure
from app.schemas.weather import ErrorResponse, WeatherSummaryResponse
from app.services.weather import WeatherSummaryService

router = APIRouter(prefix="/weather")


def failure_response(failure: SummaryFailure) -> JSONResponse:
    match failure.kind:
        case ErrorKind.NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
        case ErrorKind.EXTERNAL_FAILURE:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        case ErrorKind.OTHER:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=failure.message).model_dump(),
    )


@router.get(
    "",
    response_model=WeatherSummaryResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def weather_summary(
    city: Annotated[str, Query()],
    service: Annotated[WeatherSummaryService, Depends(get_weather_service)],
    executor: Annotated[Executor, Depends(get_weather_executor)],
) -> WeatherSummaryResponse | JSONResponse:
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(executor, service.summarize, city)
    if isinstance(result, SummaryFailure):
        return failure_response(result)
    return WeatherSummaryResponse.from_summary(result)
