"""
cep_weather.api.routers.health

Health endpoint.

Responsibilities:
- Provide a liveness probe (`/health`) naming the serving service.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cep_weather.api.deps import settings_dep
from cep_weather.settings import Settings

router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    # Liveness: process is up and serving HTTP. No collaborator is contacted.
    return {"status": "healthy", "service": settings.resolved_service_name}


# --- Module Notes -----------------------------------------------------------
# Both services mount this router, so probes look the same for either role.
