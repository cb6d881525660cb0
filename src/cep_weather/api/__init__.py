"""
cep_weather.api

API package for the edge and orchestrator services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: body reading + delegation to services.
