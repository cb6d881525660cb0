"""
cep_weather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for both service roles.
- Hide secrets from repr/logging (weather API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Role = Literal["edge", "orchestrator"]

_DEFAULT_SERVICE_NAMES: dict[str, str] = {"edge": "service-a", "orchestrator": "service-b"}
_DEFAULT_PORTS: dict[str, int] = {"edge": 8080, "orchestrator": 8081}


class Settings(BaseSettings):
    """
    One settings object for both processes; `role` selects which app is served.
    Role-dependent values (service name, port) fall back to per-role defaults.
    """

    model_config = SettingsConfigDict(env_prefix="CEP_WEATHER_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    role: Role = "edge"
    service_name: str | None = None
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int | None = None

    # Edge -> orchestrator hop
    orchestrator_url: str = "http://localhost:8081"

    # External collaborators used by the orchestrator
    postal_lookup_base_url: str = "https://viacep.com.br/ws"
    weather_api_base_url: str = "http://api.weatherapi.com/v1"
    weather_api_key: str = Field(default="", repr=False)

    # Every outbound call is bounded by this timeout; there are no retries.
    http_timeout_seconds: float = 30.0
    disconnect_poll_interval_seconds: float = 0.1

    # Tracing
    tracing_enabled: bool = True
    zipkin_url: str = "http://localhost:9411/api/v2/spans"
    # Per-export HTTP timeout of the Zipkin exporter; independent of the flush deadline.
    zipkin_timeout_seconds: int = 10
    trace_shutdown_timeout_seconds: float = 5.0

    @property
    def resolved_service_name(self) -> str:
        return self.service_name or _DEFAULT_SERVICE_NAMES[self.role]

    @property
    def resolved_port(self) -> int:
        return self.api_port if self.api_port is not None else _DEFAULT_PORTS[self.role]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Both services read the same env namespace; docker-compose sets CEP_WEATHER_ROLE
# per container.
