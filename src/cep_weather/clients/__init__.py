"""
cep_weather.clients

Outbound HTTP client boundary.

Responsibilities:
- Postal lookup (ViaCEP) and weather (WeatherAPI) collaborators for the orchestrator.
- The edge -> orchestrator forwarding client.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these classes, not on httpx directly. Each client injects the
# current trace context into its request headers.
