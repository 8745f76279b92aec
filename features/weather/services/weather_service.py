import logging
import random
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from core.config import settings
from features.common.exceptions.conditions_exceptions import (
    LocationNotFoundError,
    WeatherPersistenceError
)
from features.common.models.location_types import Location
from features.common.utils.conversions import UnitConversions
from features.weather.models.weather_types import (
    WeatherCondition,
    WeatherResponse,
    WeatherSample,
    WindDirection
)
from features.weather.services.open_meteo_client import OpenMeteoClient
from repositories.location_repo import LocationRepository
from repositories.weather_repo import WeatherRepository

logger = logging.getLogger(__name__)

REFERENCE_LATITUDE = 55
WINTER_MONTHS = (11, 12, 1, 2)
SUMMER_MONTHS = (6, 7, 8, 9)
DAYTIME_HOURS = range(10, 17)

# (upper bound exclusive in °F, candidates); repeats weight the draw
CONDITION_BANDS = [
    (10, [WeatherCondition.SNOW, WeatherCondition.SNOW, WeatherCondition.CLOUDY, WeatherCondition.CLEAR]),
    (32, [WeatherCondition.SNOW, WeatherCondition.CLOUDY, WeatherCondition.PARTLY_CLOUDY, WeatherCondition.CLEAR]),
    (50, [WeatherCondition.CLOUDY, WeatherCondition.RAIN, WeatherCondition.PARTLY_CLOUDY, WeatherCondition.CLEAR]),
    (float("inf"), [WeatherCondition.CLEAR, WeatherCondition.PARTLY_CLOUDY, WeatherCondition.RAIN, WeatherCondition.CLEAR]),
]

def seasonal_base(month: int) -> int:
    if month in WINTER_MONTHS:
        return -10
    if month in SUMMER_MONTHS:
        return 55
    return 35

def synthesize_temperature(lat: float, now: datetime, rng: random.Random) -> int:
    """Latitude, season and time-of-day adjusted temperature in °F."""
    latitude_effect = (lat - REFERENCE_LATITUDE) * -2
    hour_effect = 5 if now.hour in DAYTIME_HOURS else -3
    return UnitConversions.round_half_up(latitude_effect + seasonal_base(now.month) + hour_effect + rng.randint(-7, 7))

def pick_condition(temperature: int, rng: random.Random) -> WeatherCondition:
    for upper, candidates in CONDITION_BANDS:
        if temperature < upper:
            return rng.choice(candidates)
    return WeatherCondition.CLEAR

class WeatherService:
    """Weather samples for the fixed Alaska city list.

    Samples are synthesized from latitude, month and local hour unless the
    configured source is ``open-meteo``. With ``update`` set, every sample is
    upserted into the hosted weather table; a failed upsert is logged and the
    remaining locations are still written.
    """

    def __init__(
        self,
        location_repo: LocationRepository,
        weather_repo: WeatherRepository,
        live_client: Optional[OpenMeteoClient] = None,
        source: Optional[str] = None,
        rng: Optional[random.Random] = None
    ) -> None:
        self.location_repo = location_repo
        self.weather_repo = weather_repo
        self.live_client = live_client
        self.source = source or settings.weather_source
        self.rng = rng or random.Random()
        self.tz = ZoneInfo(settings.timezone)
        logger.info(f"Weather service initialized with source '{self.source}'")

    @property
    def source_label(self) -> str:
        if self.source == "open-meteo":
            return "Open-Meteo API (real-time)"
        return "Synthetic (latitude/season model)"

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def resolve(self, city: str) -> Location:
        location = self.location_repo.find(city)
        if not location:
            raise LocationNotFoundError(city)
        return location

    def generate_sample(
        self,
        location: Location,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> WeatherSample:
        """Synthesize a weather sample for one location."""
        rng = rng or self.rng
        now = now or self.now()

        temperature = synthesize_temperature(location.lat, now, rng)
        return WeatherSample(
            location=location.name,
            temperature_f=temperature,
            condition=pick_condition(temperature, rng),
            high_f=temperature + rng.randint(3, 10),
            low_f=temperature - rng.randint(5, 14),
            humidity=rng.randint(40, 79),
            wind_mph=rng.randint(5, 24),
            wind_direction=rng.choice(list(WindDirection)),
            updated_at=now
        )

    async def get_weather(self, city: Optional[str] = None, update: bool = False) -> WeatherResponse:
        """Get weather for one city, or every known city when none is given."""
        if city:
            logger.info(f"Generating weather data for {city}")
            locations = [self.resolve(city)]
        else:
            logger.info("Generating weather data for all cities")
            locations = self.location_repo.load_locations()

        samples = await self._collect(locations, single=bool(city))

        if update and samples:
            await self.persist(samples)

        return WeatherResponse(
            success=True,
            source=self.source_label,
            data=samples,
            updated_at=self.now(),
            count=len(samples)
        )

    async def persist(self, samples: List[WeatherSample]) -> int:
        """Upsert samples one by one; returns how many were written."""
        written = 0
        for sample in samples:
            try:
                await self.weather_repo.upsert(sample)
                written += 1
            except WeatherPersistenceError as e:
                logger.error(f"Error updating weather for {sample.location}: {str(e)}")
        logger.info(f"Updated weather data for {written} of {len(samples)} cities in database")
        return written

    async def _collect(self, locations: List[Location], single: bool) -> List[WeatherSample]:
        if self.source != "open-meteo" or self.live_client is None:
            now = self.now()
            return [self.generate_sample(location, now) for location in locations]

        if single:
            return [await self.live_client.fetch(locations[0])]
        return await self.live_client.fetch_many(locations)
