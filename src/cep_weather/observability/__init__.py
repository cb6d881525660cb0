"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Tracer provider lifecycle and W3C trace-context propagation.
- Request context middleware for log enrichment and server spans.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Request handlers depend on `Tracing`, never on the OpenTelemetry globals.
