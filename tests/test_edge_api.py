"""
tests.test_edge_api

Edge endpoint (`POST /`) wired to an in-process orchestrator.

Responsibilities:
- End-to-end scenarios through both services.
- Verbatim relay of orchestrator responses.
- A single connected trace across the service boundary.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import pytest

from cep_weather.api.app import create_edge_app, create_orchestrator_app


@pytest.fixture
def system(make_settings, make_tracing, collaborators, serve):
    """Yields a client for the edge, with the orchestrator running behind it."""

    @asynccontextmanager
    async def run(**overrides):
        orchestrator_settings = make_settings(role="orchestrator", **overrides)
        orchestrator = create_orchestrator_app(
            settings=orchestrator_settings,
            tracing=make_tracing(orchestrator_settings),
            transport=collaborators.transport(),
        )
        edge_settings = make_settings()
        edge = create_edge_app(
            settings=edge_settings,
            tracing=make_tracing(edge_settings),
            transport=httpx.ASGITransport(app=orchestrator),
        )
        async with orchestrator.router.lifespan_context(orchestrator):
            async with serve(edge) as client:
                yield client

    return run


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("cep", "city"),
    [("01310100", "São Paulo"), ("20040020", "Rio de Janeiro")],
)
async def test_valid_cep_resolves_city_and_temperatures(system, cep, city) -> None:
    async with system() as client:
        r = await client.post("/", json={"cep": cep})

    assert r.status_code == 200
    body = r.json()
    assert body["city"] == city
    assert body["temp_C"] == 22.5
    assert body["temp_F"] == pytest.approx(body["temp_C"] * 1.8 + 32)
    assert body["temp_K"] == pytest.approx(body["temp_C"] + 273)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"cep": "123"}, {"cep": "abcd1234"}, {"cep": "123456789"}, {"cep": ""}, {}],
)
async def test_invalid_input_never_reaches_the_orchestrator(
    system, collaborators, span_exporter, payload
) -> None:
    async with system() as client:
        r = await client.post("/", json=payload)

    assert r.status_code == 422
    assert r.json() == {"message": "invalid zipcode"}
    assert collaborators.requests == []
    names = {s.name for s in span_exporter.get_finished_spans()}
    assert "forward-to-orchestrator" not in names
    assert "POST /weather" not in names


@pytest.mark.asyncio
async def test_unknown_cep_is_relayed_as_404(system) -> None:
    async with system() as client:
        r = await client.post("/", json={"cep": "99999999"})

    assert r.status_code == 404
    assert r.json() == {"message": "can not find zipcode"}


@pytest.mark.asyncio
async def test_orchestrator_failure_is_relayed_verbatim(system) -> None:
    async with system(weather_api_key="expired-key") as client:
        r = await client.post("/", json={"cep": "01310100"})

    assert r.status_code == 500
    assert r.json() == {"message": "failed to fetch weather information"}


@pytest.mark.asyncio
async def test_orchestrator_unreachable_is_500(make_settings, make_tracing, serve) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    settings = make_settings()
    edge = create_edge_app(
        settings=settings,
        tracing=make_tracing(settings),
        transport=httpx.MockTransport(refuse),
    )
    async with serve(edge) as client:
        r = await client.post("/", json={"cep": "01310100"})

    assert r.status_code == 500
    assert r.json() == {"message": "internal server error"}


@pytest.mark.asyncio
async def test_relay_does_not_reinterpret_the_body(make_settings, make_tracing, serve) -> None:
    # Anything JSON comes back byte-for-byte, with the upstream status.
    upstream = b'{"city": "Bel\\u00e9m", "temp_C": 31, "extra": [1, 2]}'
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            203, content=upstream, headers={"content-type": "application/json"}
        )
    )
    settings = make_settings()
    edge = create_edge_app(settings=settings, tracing=make_tracing(settings), transport=transport)
    async with serve(edge) as client:
        r = await client.post("/", json={"cep": "66010000"})

    assert r.status_code == 203
    assert r.content == upstream


@pytest.mark.asyncio
async def test_one_trace_spans_both_services(system, span_exporter) -> None:
    async with system() as client:
        r = await client.post("/", json={"cep": "01310100"})
    assert r.status_code == 200

    spans = {s.name: s for s in span_exporter.get_finished_spans()}
    assert {
        "POST /",
        "handle-cep-request",
        "forward-to-orchestrator",
        "POST /weather",
        "handle-weather-request",
        "fetch-cep-info",
        "fetch-weather-info",
    } <= set(spans)
    assert len({s.context.trace_id for s in spans.values()}) == 1

    # The orchestrator's server span continues from the edge's forwarding span.
    assert spans["POST /weather"].parent.span_id == spans["forward-to-orchestrator"].context.span_id
    assert spans["POST /weather"].parent.is_remote
    assert spans["forward-to-orchestrator"].parent.span_id == spans["handle-cep-request"].context.span_id
    assert spans["POST /"].resource.attributes["service.name"] == "service-a"
    assert spans["POST /weather"].resource.attributes["service.name"] == "service-b"


@pytest.mark.asyncio
async def test_inbound_trace_context_is_continued(system, span_exporter) -> None:
    trace_id = "4bf92f3577b34da6a3ce929d0e0e4736"
    headers = {"traceparent": f"00-{trace_id}-00f067aa0ba902b7-01"}
    async with system() as client:
        r = await client.post("/", json={"cep": "01310100"}, headers=headers)
    assert r.status_code == 200

    trace_ids = {format(s.context.trace_id, "032x") for s in span_exporter.get_finished_spans()}
    assert trace_ids == {trace_id}
