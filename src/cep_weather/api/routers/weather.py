"""
cep_weather.api.routers.weather

Entry point of the orchestrator service.

Responsibilities:
- Accept `POST /weather` with `{"cep": ...}`.
- Return `{"city", "temp_C", "temp_F", "temp_K"}` on success.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from cep_weather.api.deps import settings_dep, weather_service_dep
from cep_weather.api.disconnect import cancel_on_disconnect
from cep_weather.services.weather_service import WeatherService
from cep_weather.settings import Settings

router = APIRouter(tags=["weather"])


@router.post("/weather")
async def handle_weather(
    request: Request,
    service: WeatherService = Depends(weather_service_dep),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    raw = await request.body()
    result = await cancel_on_disconnect(
        request,
        service.handle_request(raw),
        poll_interval=settings.disconnect_poll_interval_seconds,
    )
    return JSONResponse(result.to_body())


# --- Module Notes -----------------------------------------------------------
# Errors are raised as `PipelineError` and rendered by the app-level handler.
