import asyncio
import logging
import aiohttp
from datetime import datetime
from typing import Any, Dict, List
from zoneinfo import ZoneInfo

from core.config import settings
from features.common.exceptions.conditions_exceptions import WeatherSourceError
from features.common.models.location_types import Location
from features.common.utils.conversions import UnitConversions
from features.weather.models.weather_types import WeatherCondition, WeatherSample

logger = logging.getLogger(__name__)

def weather_code_to_condition(code: int) -> WeatherCondition:
    """Map a WMO weather code to a display condition."""
    if code == 0:
        return WeatherCondition.CLEAR
    if code <= 3:
        return WeatherCondition.PARTLY_CLOUDY
    if code <= 49:
        return WeatherCondition.CLOUDY
    if code <= 67:
        return WeatherCondition.RAIN
    if code <= 77:
        return WeatherCondition.SNOW
    if code <= 82:
        return WeatherCondition.RAIN
    if code <= 86:
        return WeatherCondition.SNOW
    if code <= 99:
        return WeatherCondition.THUNDERSTORM
    return WeatherCondition.CLOUDY

class OpenMeteoClient:
    """Client for current conditions from the Open-Meteo forecast API (no key required)."""

    def __init__(self, base_url: str = None, timeout: int = None) -> None:
        self.base_url = base_url or settings.open_meteo_url
        self.timeout = timeout or settings.request["timeout"]
        self.tz = ZoneInfo(settings.timezone)

    async def fetch(self, location: Location) -> WeatherSample:
        params = {
            "latitude": location.lat,
            "longitude": location.lng,
            **settings.open_meteo_params
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self.base_url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        raise WeatherSourceError(f"Open-Meteo API error: {response.status}")
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message = str(e) or type(e).__name__
            logger.error(f"Error fetching Open-Meteo data for {location.name}: {message}")
            raise WeatherSourceError(message) from e

        return self.parse(location, data)

    async def fetch_many(self, locations: List[Location]) -> List[WeatherSample]:
        """Fetch all locations concurrently, dropping the ones that fail."""
        results = await asyncio.gather(
            *(self.fetch(location) for location in locations),
            return_exceptions=True
        )
        samples = []
        for location, result in zip(locations, results):
            if isinstance(result, Exception):
                logger.warning(f"Skipping {location.name}: {str(result)}")
                continue
            samples.append(result)
        return samples

    def parse(self, location: Location, data: Dict[str, Any]) -> WeatherSample:
        try:
            current = data["current"]
            daily = data["daily"]
            return WeatherSample(
                location=location.name,
                temperature_f=UnitConversions.celsius_to_fahrenheit(current["temperature_2m"]),
                condition=weather_code_to_condition(int(current["weather_code"])),
                high_f=UnitConversions.celsius_to_fahrenheit(daily["temperature_2m_max"][0]),
                low_f=UnitConversions.celsius_to_fahrenheit(daily["temperature_2m_min"][0]),
                humidity=UnitConversions.round_half_up(current["relative_humidity_2m"]),
                wind_mph=UnitConversions.kmh_to_mph(current["wind_speed_10m"]),
                wind_direction=UnitConversions.degrees_to_compass(current["wind_direction_10m"]),
                updated_at=datetime.now(self.tz)
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise WeatherSourceError(f"Malformed Open-Meteo response for {location.name}: {str(e)}") from e
