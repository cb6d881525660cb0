"""
cep_weather.services

Request pipeline services.

Responsibilities:
- Edge validation and transparent relay.
- Orchestration of postal lookup, weather fetch and unit conversion.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `cep_weather.errors.PipelineError` subclasses; the API layer maps
# them to responses.
