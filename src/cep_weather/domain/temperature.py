"""
cep_weather.domain.temperature

Temperature scale conversions.

Responsibilities:
- Derive Fahrenheit and Kelvin from a single Celsius reading.
"""

from __future__ import annotations

# Kelvin offset is 273, not 273.15; downstream consumers compare against it.
KELVIN_OFFSET = 273


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET
