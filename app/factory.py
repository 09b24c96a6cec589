from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from app.api.router import api_router
from app.clients.openweather import OpenWeatherClient
from app.core.config import Settings, load_settings
from app.core.errors import GENERIC_ERROR_MESSAGE
from app.core.logging import configure_logging
from app.services.weather import SummaryCache

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.openweather_client = OpenWeatherClient(
            api_key=settings.openweather_api_key,
            timeout_seconds=settings.openweather_timeout_seconds,
            user_agent=settings.openweather_user_agent,
            base_url=str(settings.openweather_base_url),
        )
        app.state.weather_executor = ThreadPoolExecutor(
            max_workers=settings.weather_worker_threads,
            thread_name_prefix="weather-summary",
        )
        logger.info("app.startup", env=settings.env)

        yield

        app.state.weather_executor.shutdown(wait=True)
        app.state.openweather_client.close()
        app.state.summary_cache.clear()
        logger.info("app.shutdown")

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Weather Summary API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.summary_cache = SummaryCache(
        max_entries=settings.summary_cache_max_entries,
        ttl_seconds=settings.summary_cache_ttl_seconds,
    )

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if settings.is_production:
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "app.unhandled_exception",
            path=request.url.path,
            error_type=type(exc).__name__,
        )
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

    app.include_router(api_router)
    return app
