"""
cep_weather.api.app

FastAPI app factories for the edge and orchestrator services.

Responsibilities:
- Build the FastAPI application for a role and register routers/middleware.
- Own the shared infrastructure lifecycle (HTTP client pool, tracing).
- Map pipeline errors to `{"message": ...}` responses.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from cep_weather import __version__
from cep_weather.api.routers.edge import router as edge_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.weather import router as weather_router
from cep_weather.domain.models import ErrorResult
from cep_weather.errors import PipelineError
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import Tracing, init_tracing
from cep_weather.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    if settings.role == "orchestrator":
        return create_orchestrator_app(settings=settings, tracing=tracing, transport=transport)
    return create_edge_app(settings=settings, tracing=tracing, transport=transport)


def create_edge_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app = _build_app(
        settings=settings.model_copy(update={"role": "edge"}),
        title="CEP Weather Edge Validator",
        tracing=tracing,
        transport=transport,
    )
    app.include_router(edge_router)
    return app


def create_orchestrator_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app = _build_app(
        settings=settings.model_copy(update={"role": "orchestrator"}),
        title="CEP Weather Orchestrator",
        tracing=tracing,
        transport=transport,
    )
    app.include_router(weather_router)
    return app


def _build_app(
    *,
    settings: Settings,
    title: str,
    tracing: Tracing | None,
    transport: httpx.AsyncBaseTransport | None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.resolved_service_name, level=settings.log_level)

    # A caller-supplied Tracing stays owned by the caller; only ours is shut down here.
    owns_tracing = tracing is None
    if tracing is None:
        tracing = init_tracing(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, role=settings.role)
        # `transport` lets tests route outbound calls to stubs or in-process apps.
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_seconds,
            transport=transport,
        ) as http:
            app.state.http = http
            yield
        if owns_tracing:
            tracing.shutdown()
        log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tracing

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(PipelineError, _pipeline_error_handler)
    app.include_router(health_router, tags=["health"])
    return app


async def _pipeline_error_handler(_: Request, exc: PipelineError) -> JSONResponse:
    # Only the public message leaves the process; `exc.detail` stays in logs and spans.
    return JSONResponse(
        ErrorResult(message=exc.message).model_dump(),
        status_code=exc.status_code,
    )


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; pipeline logic stays
# in the services and clients.
