"""
cep_weather.services.edge_service

Edge validator (service A role).

Responsibilities:
- Decode and validate the caller's CEP before anything leaves the process.
- Forward it to the orchestrator and relay the answer verbatim.
"""

from __future__ import annotations

from cep_weather.clients.orchestrator_http import OrchestratorClient
from cep_weather.domain.cep import parse_cep_request
from cep_weather.domain.models import RelayedResponse
from cep_weather.errors import PipelineError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import (
    HTTP_REQUEST_BODY_SIZE,
    HTTP_STATUS_CODE,
    Tracing,
)

log = get_logger(__name__)


class EdgeService:
    def __init__(self, *, tracing: Tracing, orchestrator: OrchestratorClient) -> None:
        self._tracing = tracing
        self._orchestrator = orchestrator

    async def handle_request(self, raw_body: bytes) -> RelayedResponse:
        with self._tracing.tracer.start_as_current_span("handle-cep-request") as span:
            span.set_attribute(HTTP_REQUEST_BODY_SIZE, len(raw_body))
            try:
                request = parse_cep_request(raw_body)
                relayed = await self._orchestrator.forward(request.cep)
            except PipelineError as exc:
                span.set_attribute(HTTP_STATUS_CODE, exc.status_code)
                log.warning(
                    "edge_request_failed",
                    status_code=exc.status_code,
                    reason=exc.detail,
                )
                raise

            # Past validation the edge is a proxy: whatever status came back is relayed.
            span.set_attribute(HTTP_STATUS_CODE, relayed.status_code)
            log.info("edge_request_relayed", status_code=relayed.status_code)
            return relayed


# --- Module Notes -----------------------------------------------------------
# The orchestrator validates again; the edge check only saves a network hop.
