"""
cep_weather.errors

Error taxonomy for the request pipeline.

Responsibilities:
- Give every non-success outcome a type, an HTTP status and a public message.
- Keep the status mapping in one place for both services.
"""

from __future__ import annotations

from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

# Spelled out: the starlette constant for 422 was renamed across releases.
HTTP_422_UNPROCESSABLE = 422
HTTP_499_CLIENT_CLOSED_REQUEST = 499


class PipelineError(Exception):
    """Base error; subclasses pin the status code and the message sent to callers."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "internal server error"

    def __init__(self, detail: str | None = None) -> None:
        # `detail` is for logs and spans only; callers always see `message`.
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidZipcode(PipelineError):
    status_code = HTTP_422_UNPROCESSABLE
    message = "invalid zipcode"


class ZipcodeNotFound(PipelineError):
    status_code = HTTP_404_NOT_FOUND
    message = "can not find zipcode"


class WeatherFetchFailed(PipelineError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message = "failed to fetch weather information"


class ForwardingFailed(PipelineError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message = "internal server error"


class RequestAbandoned(PipelineError):
    status_code = HTTP_499_CLIENT_CLOSED_REQUEST
    message = "client closed request"


# --- Module Notes -----------------------------------------------------------
# Nothing here is retried. Each error ends exactly one request.
