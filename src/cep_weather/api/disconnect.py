"""
cep_weather.api.disconnect

Abandon in-flight work when the caller goes away.

Responsibilities:
- Run a request's pipeline as its own task.
- Cancel that task (and its outbound calls) once the client disconnects.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from starlette.requests import Request

from cep_weather.errors import RequestAbandoned
from cep_weather.observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


async def cancel_on_disconnect(request: Request, work: Awaitable[T], *, poll_interval: float) -> T:
    # The task copies the current context, so spans opened by `work` keep their parent.
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                log.info("client_disconnected")
                raise RequestAbandoned("client disconnected before the response was ready")
    finally:
        if not task.done():
            task.cancel()
            # Let the task unwind its spans before the handler responds.
            await asyncio.gather(task, return_exceptions=True)


# --- Module Notes -----------------------------------------------------------
# Only the one request's task is cancelled; other requests are unaffected.
