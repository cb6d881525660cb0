"""
cep_weather.services.weather_service

Orchestrator (service B role).

Responsibilities:
- Re-validate the CEP received from the edge.
- Resolve CEP -> locality -> current temperature via the collaborator clients.
- Convert the reading and build the consolidated `WeatherResult`.
- Record the furthest pipeline stage reached on the request span.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry.trace import Span

from cep_weather.clients.postal_lookup import PostalLookupClient
from cep_weather.clients.weather_api import WeatherApiClient
from cep_weather.domain.cep import decode_cep_request, is_valid_cep
from cep_weather.domain.models import WeatherResult
from cep_weather.errors import InvalidZipcode, PipelineError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import HTTP_STATUS_CODE, Tracing

log = get_logger(__name__)

STAGE_ATTRIBUTE = "pipeline.stage"


class Stage(str, enum.Enum):
    # Received -> Validated -> LocalityResolved -> TemperatureResolved -> Converted -> Responded
    received = "received"
    validated = "validated"
    locality_resolved = "locality_resolved"
    temperature_resolved = "temperature_resolved"
    converted = "converted"
    responded = "responded"


class WeatherService:
    def __init__(
        self,
        *,
        tracing: Tracing,
        postal_lookup: PostalLookupClient,
        weather: WeatherApiClient,
    ) -> None:
        self._tracing = tracing
        self._postal_lookup = postal_lookup
        self._weather = weather

    async def handle_request(self, raw_body: bytes) -> WeatherResult:
        """Decode an inbound `{"cep": ...}` body and run the pipeline under one span."""

        with self._tracing.tracer.start_as_current_span("handle-weather-request") as span:
            progress = _Progress(span)
            with progress.failures_recorded():
                request = decode_cep_request(raw_body)
            return await self._resolve(progress, request.cep)

    async def resolve_weather(self, cep: str) -> WeatherResult:
        with self._tracing.tracer.start_as_current_span("handle-weather-request") as span:
            return await self._resolve(_Progress(span), cep)

    async def _resolve(self, progress: _Progress, cep: str) -> WeatherResult:
        with progress.failures_recorded():
            # The edge already checked this; a request may also come straight to us.
            if not is_valid_cep(cep):
                raise InvalidZipcode("malformed cep")
            progress.advance(Stage.validated)

            locality = await self._postal_lookup.lookup(cep)
            progress.advance(Stage.locality_resolved)

            reading = await self._weather.current_temperature(locality.city)
            progress.advance(Stage.temperature_resolved)

            result = WeatherResult.from_celsius(city=locality.city, celsius=reading.celsius)
            progress.advance(Stage.converted)

        progress.span.set_attribute(HTTP_STATUS_CODE, 200)
        progress.advance(Stage.responded)
        log.info(
            "weather_resolved",
            city=result.city,
            temp_c=result.temp_c,
            source=reading.source,
        )
        return result


class _Progress:
    """Tracks the furthest stage one request reached and mirrors it onto its span."""

    def __init__(self, span: Span) -> None:
        self.span = span
        self.stage = Stage.received
        span.set_attribute(STAGE_ATTRIBUTE, self.stage.value)

    def advance(self, stage: Stage) -> None:
        self.stage = stage
        self.span.set_attribute(STAGE_ATTRIBUTE, stage.value)

    @contextmanager
    def failures_recorded(self) -> Iterator[None]:
        try:
            yield
        except PipelineError as exc:
            self.span.set_attribute(HTTP_STATUS_CODE, exc.status_code)
            log.warning(
                "weather_request_failed",
                stage=self.stage.value,
                status_code=exc.status_code,
                reason=exc.detail,
            )
            raise


# --- Module Notes -----------------------------------------------------------
# Error exits: received -> 422, validated -> 404, locality_resolved -> 500.
