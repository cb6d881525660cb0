"""
tests.conftest

Shared fixtures for in-process service tests.

Responsibilities:
- Build settings and an in-memory tracing context per test.
- Stub the ViaCEP and WeatherAPI collaborators with `httpx.MockTransport`.
- Serve apps through `httpx.ASGITransport` with their lifespan running.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
import pytest
from fastapi import FastAPI
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.observability.tracing import Tracing, init_tracing
from cep_weather.settings import Settings

VIACEP_BASE = "https://viacep.test/ws"
WEATHER_BASE = "https://weather.test/v1"
ORCHESTRATOR_URL = "http://orchestrator.test"

LOCALITIES: dict[str, dict[str, object]] = {
    "01310100": {
        "cep": "01310-100",
        "logradouro": "Avenida Paulista",
        "bairro": "Bela Vista",
        "localidade": "São Paulo",
        "uf": "SP",
    },
    "20040020": {
        "cep": "20040-020",
        "logradouro": "Praça Pio X",
        "bairro": "Centro",
        "localidade": "Rio de Janeiro",
        "uf": "RJ",
    },
    # Older ViaCEP deployments send the flag as a string.
    "99999999": {"erro": "true"},
}

TEMPERATURES: dict[str, float] = {"São Paulo": 25.0, "Rio de Janeiro": 30.5}


class Collaborators:
    """Fake ViaCEP + WeatherAPI; records every request it serves."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "viacep.test":
            cep = request.url.path.split("/")[2]
            return httpx.Response(200, json=LOCALITIES.get(cep, {"erro": True}))
        if request.url.host == "weather.test":
            if request.url.params.get("key") != "live-key":
                return httpx.Response(401, json={"error": {"code": 2006, "message": "bad key"}})
            city = request.url.params["q"]
            return httpx.Response(200, json={"location": {"name": city}, "current": {"temp_c": TEMPERATURES[city]}})
        return httpx.Response(599)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def factory(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "env": "test",
            "tracing_enabled": False,
            "postal_lookup_base_url": VIACEP_BASE,
            "weather_api_base_url": WEATHER_BASE,
            "weather_api_key": "",
            "orchestrator_url": ORCHESTRATOR_URL,
            "http_timeout_seconds": 5.0,
            "disconnect_poll_interval_seconds": 0.05,
        }
        values.update(overrides)
        return Settings(**values)

    return factory


@pytest.fixture
def make_tracing(span_exporter: InMemorySpanExporter) -> Callable[[Settings], Tracing]:
    def factory(settings: Settings) -> Tracing:
        return init_tracing(settings, span_processor=SimpleSpanProcessor(span_exporter))

    return factory


@pytest.fixture
def collaborators() -> Collaborators:
    return Collaborators()


@asynccontextmanager
async def serving(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def serve() -> Callable[[FastAPI], AbstractAsyncContextManager[httpx.AsyncClient]]:
    return serving


# --- Module Notes -----------------------------------------------------------
# "live-key" is the only key the fake WeatherAPI accepts.
