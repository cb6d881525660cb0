"""
cep_weather.api.__main__

Entrypoint for running a service via `python -m cep_weather.api`.

Responsibilities:
- Load settings (role from `CEP_WEATHER_ROLE` unless a console script pins it).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.app import create_app
from cep_weather.settings import Role, get_settings


def main(role: Role | None = None) -> None:
    settings = get_settings()
    if role is not None:
        settings = settings.model_copy(update={"role": role})
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.resolved_port,
        log_config=None,  # structlog
    )


def run_edge() -> None:
    main("edge")


def run_orchestrator() -> None:
    main("orchestrator")


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# docker-compose runs one container per role from the same image.
