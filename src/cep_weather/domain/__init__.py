"""
cep_weather.domain

Request-scoped value objects and pure functions shared by both services.

Responsibilities:
- CEP validation and request decoding.
- Temperature conversion.
- Result models returned to callers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O.
