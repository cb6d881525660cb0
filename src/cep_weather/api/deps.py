"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose app-scoped resources (settings, tracing, shared HTTP client).
- Assemble the per-request service objects.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from cep_weather.clients.orchestrator_http import OrchestratorClient
from cep_weather.clients.postal_lookup import PostalLookupClient
from cep_weather.clients.weather_api import WeatherApiClient
from cep_weather.observability.tracing import Tracing
from cep_weather.services.edge_service import EdgeService
from cep_weather.services.weather_service import WeatherService
from cep_weather.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Stored by the app factory so tests can run apps with different settings side by side.
    return request.app.state.settings  # type: ignore[no-any-return]


def tracing_dep(request: Request) -> Tracing:
    return request.app.state.tracing  # type: ignore[no-any-return]


def http_client_dep(request: Request) -> httpx.AsyncClient:
    # Opened in the app lifespan (see `cep_weather.api.app`); shared across requests.
    return request.app.state.http  # type: ignore[no-any-return]


def edge_service_dep(
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    http: httpx.AsyncClient = Depends(http_client_dep),
) -> EdgeService:
    client = OrchestratorClient(http=http, tracing=tracing, base_url=settings.orchestrator_url)
    return EdgeService(tracing=tracing, orchestrator=client)


def weather_service_dep(
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    http: httpx.AsyncClient = Depends(http_client_dep),
) -> WeatherService:
    return WeatherService(
        tracing=tracing,
        postal_lookup=PostalLookupClient(
            http=http,
            tracing=tracing,
            base_url=settings.postal_lookup_base_url,
        ),
        weather=WeatherApiClient(
            http=http,
            tracing=tracing,
            base_url=settings.weather_api_base_url,
            api_key=settings.weather_api_key,
        ),
    )


# --- Module Notes -----------------------------------------------------------
# Service objects are cheap and request-scoped; only the HTTP pool is shared.
