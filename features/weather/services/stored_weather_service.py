import logging
from typing import Optional
from pydantic import ValidationError

from core.cache import get_cache
from core.config import settings
from features.common.exceptions.conditions_exceptions import WeatherPersistenceError
from features.weather.models.weather_types import WeatherSample
from features.weather.services.weather_service import WeatherService
from repositories.weather_repo import WeatherRepository

logger = logging.getLogger(__name__)

STORED_WEATHER_NAMESPACE = "stored_weather"

class StoredWeatherService:
    """Cached read view over the hosted weather table.

    The cache is flushed by realtime change notifications for the weather
    table. When no row exists, or the backend cannot be reached, a freshly
    synthesized sample is served instead and not cached.
    """

    def __init__(self, weather_service: WeatherService, weather_repo: WeatherRepository) -> None:
        self.weather_service = weather_service
        self.weather_repo = weather_repo
        self._cache = get_cache()
        self.ttl = settings.get_cache_ttl()[STORED_WEATHER_NAMESPACE]

    async def get_current(self, city: str) -> WeatherSample:
        location = self.weather_service.resolve(city)

        cached_sample = await self._cache.get(location.name, namespace=STORED_WEATHER_NAMESPACE)
        if cached_sample is not None:
            return cached_sample

        row = await self._read_row(location.name)
        if row is None:
            logger.info(f"No stored weather for {location.name}, using synthesized sample")
            return self.weather_service.generate_sample(location)

        try:
            sample = WeatherSample(**row)
        except ValidationError as e:
            logger.warning(f"Stored weather for {location.name} is incomplete, using synthesized sample: {str(e)}")
            return self.weather_service.generate_sample(location)

        await self._cache.set(location.name, sample, ttl=self.ttl, namespace=STORED_WEATHER_NAMESPACE)
        return sample

    async def invalidate(self) -> None:
        await self._cache.clear(namespace=STORED_WEATHER_NAMESPACE)
        logger.info("Stored weather cache cleared")

    async def _read_row(self, location: str) -> Optional[dict]:
        if not self.weather_repo.configured:
            return None
        try:
            return await self.weather_repo.latest(location)
        except WeatherPersistenceError as e:
            logger.warning(f"Falling back to synthesized weather for {location}: {str(e)}")
            return None
