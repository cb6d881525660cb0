"""
cep_weather.clients.orchestrator_http

Client used by the edge to forward a validated CEP to the orchestrator.

Responsibilities:
- POST `{"cep": ...}` to `{orchestrator_url}/weather` with trace context attached.
- Return the upstream status and body as an opaque `RelayedResponse`.
"""

from __future__ import annotations

import httpx
from opentelemetry.trace import SpanKind

from cep_weather.domain.models import RelayedResponse
from cep_weather.errors import ForwardingFailed
from cep_weather.observability.tracing import (
    HTTP_METHOD,
    HTTP_STATUS_CODE,
    HTTP_URL,
    Tracing,
)


class OrchestratorClient:
    def __init__(self, *, http: httpx.AsyncClient, tracing: Tracing, base_url: str) -> None:
        self._http = http
        self._tracing = tracing
        self._url = f"{base_url.rstrip('/')}/weather"

    async def forward(self, cep: str) -> RelayedResponse:
        with self._tracing.tracer.start_as_current_span(
            "forward-to-orchestrator",
            kind=SpanKind.CLIENT,
            attributes={HTTP_METHOD: "POST", HTTP_URL: self._url},
        ) as span:
            try:
                r = await self._http.post(
                    self._url,
                    json={"cep": cep},
                    headers=self._tracing.inject(),
                )
            except httpx.HTTPError as exc:
                raise ForwardingFailed(f"orchestrator unreachable: {exc!r}") from exc
            span.set_attribute(HTTP_STATUS_CODE, r.status_code)

        # The body is only checked for being JSON; its schema belongs to the orchestrator.
        try:
            r.json()
        except ValueError as exc:
            raise ForwardingFailed("orchestrator returned a non-JSON body") from exc

        return RelayedResponse(
            status_code=r.status_code,
            body=r.content,
            media_type=r.headers.get("content-type", "application/json"),
        )


# --- Module Notes -----------------------------------------------------------
# No retries: a failed forward is reported to the caller immediately.
