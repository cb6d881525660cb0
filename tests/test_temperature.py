"""
tests.test_temperature

Unit conversion and the consolidated result body.
"""

from __future__ import annotations

import pytest

from cep_weather.domain.models import WeatherResult
from cep_weather.domain.temperature import celsius_to_fahrenheit, celsius_to_kelvin


@pytest.mark.parametrize(
    ("celsius", "fahrenheit", "kelvin"),
    [
        (0.0, 32.0, 273.0),
        (100.0, 212.0, 373.0),
        (-40.0, -40.0, 233.0),
        (22.5, 72.5, 295.5),
        (25.0, 77.0, 298.0),
    ],
)
def test_conversions(celsius: float, fahrenheit: float, kelvin: float) -> None:
    assert celsius_to_fahrenheit(celsius) == pytest.approx(fahrenheit)
    assert celsius_to_kelvin(celsius) == pytest.approx(kelvin)


def test_kelvin_offset_is_273_not_273_15() -> None:
    assert celsius_to_kelvin(0) == 273


@pytest.mark.parametrize("celsius", [-12.3, 0.1, 17.0, 31.9, 48.75])
def test_result_scales_are_derived_from_one_reading(celsius: float) -> None:
    result = WeatherResult.from_celsius(city="Curitiba", celsius=celsius)

    assert result.temp_c == celsius
    assert result.temp_f == celsius * 1.8 + 32
    assert result.temp_k == celsius + 273


def test_result_body_uses_wire_field_names() -> None:
    body = WeatherResult.from_celsius(city="São Paulo", celsius=22.5).to_body()

    assert set(body) == {"city", "temp_C", "temp_F", "temp_K"}
    assert body["city"] == "São Paulo"
    assert body["temp_C"] == 22.5
    assert body["temp_F"] == pytest.approx(72.5)
    assert body["temp_K"] == pytest.approx(295.5)
