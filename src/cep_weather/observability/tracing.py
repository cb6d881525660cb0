"""
cep_weather.observability.tracing

Tracer provider lifecycle and trace-context propagation.

Responsibilities:
- Build one `TracerProvider` per process with a batched Zipkin exporter.
- Inject/extract W3C trace context (traceparent + baggage) on HTTP headers.
- Drain pending spans on shutdown within a bounded deadline.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cep_weather.observability.logging import get_logger
from cep_weather.settings import Settings

log = get_logger(__name__)

# Span attribute keys (HTTP semantic conventions, pre-1.21 names).
HTTP_METHOD = "http.method"
HTTP_URL = "http.url"
HTTP_STATUS_CODE = "http.status_code"
HTTP_REQUEST_BODY_SIZE = "http.request_content_length"


@dataclass(frozen=True)
class Tracing:
    """
    Process-wide tracing state, created once at startup and handed to the app.
    Nothing here is registered as an OpenTelemetry global.
    """

    provider: TracerProvider
    tracer: Tracer
    propagator: TextMapPropagator
    shutdown_timeout_seconds: float = 5.0

    def inject(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        # Writes traceparent/tracestate/baggage for the *current* context.
        carrier: dict[str, str] = dict(headers or {})
        self.propagator.inject(carrier)
        return carrier

    def extract(self, headers: Mapping[str, str]) -> Context:
        # Missing or malformed headers yield an empty context, i.e. a new trace.
        return self.propagator.extract(dict(headers))

    def shutdown(self) -> None:
        timeout_millis = int(self.shutdown_timeout_seconds * 1000)
        if not self.provider.force_flush(timeout_millis=timeout_millis):
            log.warning("trace_flush_timeout", timeout_ms=timeout_millis)
        self.provider.shutdown()


def build_propagator() -> TextMapPropagator:
    return CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])


def init_tracing(
    settings: Settings,
    *,
    span_processor: SpanProcessor | None = None,
) -> Tracing:
    """
    Create the tracing context for one service process.

    `span_processor` overrides the default batched Zipkin export (tests pass a
    `SimpleSpanProcessor` over an in-memory exporter). With tracing disabled and no
    override, spans are still created and propagated but never exported.
    """

    resource = Resource.create(
        {
            SERVICE_NAME: settings.resolved_service_name,
            SERVICE_VERSION: settings.service_version,
        }
    )
    provider = TracerProvider(resource=resource)

    exporter_name = "custom" if span_processor is not None else "none"
    if span_processor is None and settings.tracing_enabled:
        # Export happens on the batch processor's worker thread; an unreachable
        # collector is logged by the exporter and never blocks a request.
        exporter = ZipkinExporter(
            endpoint=settings.zipkin_url,
            timeout=settings.zipkin_timeout_seconds,
        )
        span_processor = BatchSpanProcessor(exporter)
        exporter_name = "zipkin"
    if span_processor is not None:
        provider.add_span_processor(span_processor)

    log.info(
        "tracing_initialized",
        exporter=exporter_name,
        endpoint=settings.zipkin_url if exporter_name == "zipkin" else None,
    )
    return Tracing(
        provider=provider,
        tracer=provider.get_tracer(settings.resolved_service_name, settings.service_version),
        propagator=build_propagator(),
        shutdown_timeout_seconds=settings.trace_shutdown_timeout_seconds,
    )


# --- Module Notes -----------------------------------------------------------
# OpenTelemetry keeps the active span in a contextvar, so it follows asyncio tasks
# the same way structlog's contextvars do.
