"""
cep_weather.domain.models

Value objects produced and consumed by the pipeline.

Responsibilities:
- Locality and temperature readings coming back from collaborators.
- The consolidated weather result and the error body.
- The opaque envelope used by the edge to relay upstream responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from cep_weather.domain.temperature import celsius_to_fahrenheit, celsius_to_kelvin


@dataclass(frozen=True, slots=True)
class LocalityRecord:
    city: str
    found: bool = True
    uf: str | None = None
    cep: str | None = None


@dataclass(frozen=True, slots=True)
class TemperatureReading:
    celsius: float
    source: Literal["live", "fallback"] = "live"


class WeatherResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")

    @classmethod
    def from_celsius(cls, *, city: str, celsius: float) -> WeatherResult:
        # All three scales come from the same reading so they can never disagree.
        return cls(
            city=city,
            temp_c=celsius,
            temp_f=celsius_to_fahrenheit(celsius),
            temp_k=celsius_to_kelvin(celsius),
        )

    def to_body(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class ErrorResult(BaseModel):
    message: str


@dataclass(frozen=True, slots=True)
class RelayedResponse:
    """Upstream status and body passed through untouched."""

    status_code: int
    body: bytes
    media_type: str = "application/json"


# --- Module Notes -----------------------------------------------------------
# The edge never parses a RelayedResponse body into WeatherResult; it only relays it.
