"""
cep_weather.clients.weather_api

WeatherAPI client used by the orchestrator to read the current temperature.

Responsibilities:
- Call `GET {base}/current.json?key=..&q=<city>&aqi=no` with trace context attached.
- Substitute a fixed reading when no usable API key is configured.
"""

from __future__ import annotations

import httpx
from opentelemetry.trace import SpanKind

from cep_weather.domain.models import TemperatureReading
from cep_weather.errors import WeatherFetchFailed
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import (
    HTTP_METHOD,
    HTTP_STATUS_CODE,
    HTTP_URL,
    Tracing,
)

log = get_logger(__name__)

FALLBACK_CELSIUS = 22.5
# "demo_key" ships in sample env files; it is treated the same as no key at all.
PLACEHOLDER_API_KEYS = frozenset({"", "demo_key"})


class WeatherApiClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        tracing: Tracing,
        base_url: str,
        api_key: str,
    ) -> None:
        self._http = http
        self._tracing = tracing
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key.strip()

    @property
    def has_credential(self) -> bool:
        return self._api_key not in PLACEHOLDER_API_KEYS

    async def current_temperature(self, city: str) -> TemperatureReading:
        with self._tracing.tracer.start_as_current_span(
            "fetch-weather-info", kind=SpanKind.CLIENT
        ) as span:
            if not self.has_credential:
                span.set_attribute(HTTP_STATUS_CODE, 200)
                span.set_attribute("weather.source", "fallback")
                log.info("weather_fallback", city=city, celsius=FALLBACK_CELSIUS)
                return TemperatureReading(celsius=FALLBACK_CELSIUS, source="fallback")

            url = f"{self._base_url}/current.json"
            params = {"key": self._api_key, "q": city, "aqi": "no"}
            # The key never reaches span storage.
            redacted = httpx.URL(url, params={**params, "key": "REDACTED"})
            span.set_attribute(HTTP_METHOD, "GET")
            span.set_attribute(HTTP_URL, str(redacted))
            span.set_attribute("weather.source", "live")

            try:
                r = await self._http.get(url, params=params, headers=self._tracing.inject())
            except httpx.HTTPError as exc:
                raise WeatherFetchFailed(f"weather API unreachable: {type(exc).__name__}") from exc

            span.set_attribute(HTTP_STATUS_CODE, r.status_code)
            if r.status_code != httpx.codes.OK:
                raise WeatherFetchFailed(f"weather API returned status {r.status_code}")

            try:
                celsius = float(r.json()["current"]["temp_c"])
            except (ValueError, KeyError, TypeError) as exc:
                raise WeatherFetchFailed("weather API returned an unexpected body") from exc

        return TemperatureReading(celsius=celsius, source="live")


# --- Module Notes -----------------------------------------------------------
# The fallback branch still opens and closes `fetch-weather-info`, so traces keep
# the same shape with or without a key.
