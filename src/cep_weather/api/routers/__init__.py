"""
cep_weather.api.routers

Router package.

Responsibilities:
- Group HTTP endpoints by concern (health, edge entry point, orchestrator entry point).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Each app includes only the routers for its role plus health.
