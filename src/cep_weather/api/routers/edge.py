"""
cep_weather.api.routers.edge

Public entry point of the edge service.

Responsibilities:
- Accept `POST /` with `{"cep": ...}`.
- Return the orchestrator's status and body unchanged.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from cep_weather.api.deps import edge_service_dep, settings_dep
from cep_weather.api.disconnect import cancel_on_disconnect
from cep_weather.services.edge_service import EdgeService
from cep_weather.settings import Settings

router = APIRouter(tags=["edge"])


@router.post("/")
async def handle_cep(
    request: Request,
    service: EdgeService = Depends(edge_service_dep),
    settings: Settings = Depends(settings_dep),
) -> Response:
    # The body is read raw so every decoding failure maps to our own 422 body.
    raw = await request.body()
    relayed = await cancel_on_disconnect(
        request,
        service.handle_request(raw),
        poll_interval=settings.disconnect_poll_interval_seconds,
    )
    return Response(
        content=relayed.body,
        status_code=relayed.status_code,
        media_type=relayed.media_type,
    )
