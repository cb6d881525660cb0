"""
cep_weather.clients.postal_lookup

ViaCEP client used by the orchestrator to resolve a CEP to a locality.

Responsibilities:
- Call `GET {base}/{cep}/json/` with trace context attached.
- Collapse every failure mode into `ZipcodeNotFound`.
"""

from __future__ import annotations

from typing import Any

import httpx
from opentelemetry.trace import SpanKind

from cep_weather.domain.models import LocalityRecord
from cep_weather.errors import ZipcodeNotFound
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import (
    HTTP_METHOD,
    HTTP_STATUS_CODE,
    HTTP_URL,
    Tracing,
)

log = get_logger(__name__)


class PostalLookupClient:
    def __init__(self, *, http: httpx.AsyncClient, tracing: Tracing, base_url: str) -> None:
        self._http = http
        self._tracing = tracing
        self._base_url = base_url.rstrip("/")

    def url_for(self, cep: str) -> str:
        return f"{self._base_url}/{cep}/json/"

    async def lookup(self, cep: str) -> LocalityRecord:
        url = self.url_for(cep)
        with self._tracing.tracer.start_as_current_span(
            "fetch-cep-info",
            kind=SpanKind.CLIENT,
            attributes={HTTP_METHOD: "GET", HTTP_URL: url},
        ) as span:
            try:
                r = await self._http.get(url, headers=self._tracing.inject())
            except httpx.HTTPError as exc:
                raise ZipcodeNotFound(f"postal lookup unreachable: {exc!r}") from exc

            span.set_attribute(HTTP_STATUS_CODE, r.status_code)
            # ViaCEP answers 400 for malformed input and 200 + {"erro": true} for unknown CEPs.
            if not r.is_success:
                raise ZipcodeNotFound(f"postal lookup returned status {r.status_code}")

            try:
                payload = r.json()
            except ValueError as exc:
                raise ZipcodeNotFound("postal lookup returned a non-JSON body") from exc

            record = _to_locality(payload)
            if not record.found:
                raise ZipcodeNotFound("CEP not found")

        log.info("locality_resolved", city=record.city, uf=record.uf)
        return record


def _to_locality(payload: Any) -> LocalityRecord:
    if not isinstance(payload, dict):
        return LocalityRecord(city="", found=False)
    # Older responses send "erro": "true" as a string.
    if payload.get("erro") in (True, "true"):
        return LocalityRecord(city="", found=False)
    city = payload.get("localidade")
    if not isinstance(city, str) or not city.strip():
        return LocalityRecord(city="", found=False)
    return LocalityRecord(
        city=city.strip(),
        found=True,
        uf=payload.get("uf") or None,
        cep=payload.get("cep") or None,
    )


# --- Module Notes -----------------------------------------------------------
# Exceptions raised inside the span block are recorded on `fetch-cep-info` by the
# SDK before they reach the orchestrator span.
