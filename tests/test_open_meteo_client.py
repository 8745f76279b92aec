import pytest

from features.common.exceptions.conditions_exceptions import WeatherSourceError
from features.common.models.location_types import Location
from features.common.utils.conversions import UnitConversions
from features.weather.models.weather_types import WeatherCondition
from features.weather.services.open_meteo_client import OpenMeteoClient, weather_code_to_condition

ANCHORAGE = Location(name="Anchorage", lat=61.2181, lng=-149.9003)

PAYLOAD = {
    "current": {
        "temperature_2m": -5.0,
        "relative_humidity_2m": 71.6,
        "weather_code": 73,
        "wind_speed_10m": 20.0,
        "wind_direction_10m": 225,
    },
    "daily": {
        "temperature_2m_max": [-1.0],
        "temperature_2m_min": [-9.5],
    },
}


@pytest.mark.parametrize("code,condition", [
    (0, WeatherCondition.CLEAR),
    (2, WeatherCondition.PARTLY_CLOUDY),
    (45, WeatherCondition.CLOUDY),
    (55, WeatherCondition.RAIN),
    (65, WeatherCondition.RAIN),
    (75, WeatherCondition.SNOW),
    (81, WeatherCondition.RAIN),
    (85, WeatherCondition.SNOW),
    (95, WeatherCondition.THUNDERSTORM),
    (120, WeatherCondition.CLOUDY),
])
def test_weather_code_mapping(code, condition):
    assert weather_code_to_condition(code) is condition


@pytest.mark.parametrize("degrees,point", [
    (0, "N"), (22, "N"), (23, "NE"), (180, "S"), (200, "S"), (225, "SW"), (338, "N"), (359, "N"), (-90, "W"),
])
def test_degrees_to_compass(degrees, point):
    assert UnitConversions.degrees_to_compass(degrees) == point


@pytest.mark.parametrize("value,ndigits,expected", [
    (2.5, 0, 3), (0.5, 0, 1), (-2.5, 0, -2), (1.4, 0, 1), (1.25, 1, 1.3), (20.04, 1, 20.0),
])
def test_round_half_up(value, ndigits, expected):
    assert UnitConversions.round_half_up(value, ndigits) == pytest.approx(expected)


def test_compass_ties_round_up():
    assert UnitConversions.degrees_to_compass(22.5) == "NE"
    assert UnitConversions.degrees_to_compass(112.5) == "SE"


def test_unit_conversions():
    assert UnitConversions.celsius_to_fahrenheit(0) == 32
    assert UnitConversions.celsius_to_fahrenheit(-40) == -40
    assert UnitConversions.celsius_to_fahrenheit(None) is None
    assert UnitConversions.kmh_to_mph(100) == 62
    assert UnitConversions.kmh_to_mph(None) is None


def test_parse_payload():
    sample = OpenMeteoClient().parse(ANCHORAGE, PAYLOAD)
    assert sample.location == "Anchorage"
    assert sample.temperature_f == 23
    assert sample.high_f == 30
    assert sample.low_f == 15
    assert sample.humidity == 72
    assert sample.wind_mph == 12
    assert sample.wind_direction.value == "SW"
    assert sample.condition is WeatherCondition.SNOW


def test_parse_malformed_payload():
    with pytest.raises(WeatherSourceError):
        OpenMeteoClient().parse(ANCHORAGE, {"current": {}})


async def test_fetch_many_drops_failed_locations(monkeypatch):
    client = OpenMeteoClient()
    nome = Location(name="Nome", lat=64.5011, lng=-165.4064)

    async def fake_fetch(location):
        if location.name == "Nome":
            raise WeatherSourceError("Open-Meteo API error: 502")
        return client.parse(location, PAYLOAD)

    monkeypatch.setattr(client, "fetch", fake_fetch)

    samples = await client.fetch_many([ANCHORAGE, nome])
    assert [s.location for s in samples] == ["Anchorage"]
