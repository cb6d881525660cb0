"""
cep_weather.observability.middleware

HTTP middleware for request-scoped logging context and server spans.

Responsibilities:
- Generate/propagate request IDs.
- Continue the caller's trace (or start one) with a SERVER span per request.
- Bind request metadata into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cep_weather.observability.tracing import (
    HTTP_METHOD,
    HTTP_STATUS_CODE,
    HTTP_URL,
    Tracing,
)


class RequestContextMiddleware:
    """
    - Ensures every request has a request id
    - Opens the SERVER span under the inbound trace context
    - Binds request-scoped contextvars for structured logs

    Plain ASGI: `receive` reaches the endpoint untouched, so
    `Request.is_disconnected()` sees the server's `http.disconnect`.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        # Prefer a caller-provided request id for trace continuity; otherwise generate one.
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        tracing: Tracing = request.app.state.tracing
        parent = tracing.extract(request.headers)

        with tracing.tracer.start_as_current_span(
            f"{request.method} {request.url.path}",
            context=parent,
            kind=SpanKind.SERVER,
            attributes={HTTP_METHOD: request.method, HTTP_URL: str(request.url)},
        ) as span:

            async def send_with_context(message: Message) -> None:
                if message["type"] == "http.response.start":
                    status_code = message["status"]
                    span.set_attribute(HTTP_STATUS_CODE, status_code)
                    if status_code >= 500:
                        span.set_status(Status(StatusCode.ERROR))
                    MutableHeaders(scope=message)["x-request-id"] = request_id
                await send(message)

            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(
                request_id=request_id,
                path=request.url.path,
                method=request.method,
            )
            try:
                await self.app(scope, receive, send_with_context)
            finally:
                # Avoid leaking context across requests under async concurrency.
                structlog.contextvars.clear_contextvars()


# --- Module Notes -----------------------------------------------------------
# The endpoint runs in the same task as this middleware, so the SERVER span is the
# parent of every span the handler opens.
