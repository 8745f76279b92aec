import asyncio
import logging
import aiohttp
from typing import Any, Dict, Optional

from core.config import settings
from features.common.exceptions.conditions_exceptions import WeatherPersistenceError
from features.weather.models.weather_types import WeatherSample

logger = logging.getLogger(__name__)

class WeatherRepository:
    """Reads and upserts rows of the hosted weather table over its REST interface."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> None:
        self.base_url = (base_url or settings.supabase_url or "").rstrip("/")
        self.api_key = api_key or settings.supabase_service_role_key
        self.table = table or settings.weather_table
        self.timeout = timeout or settings.request["timeout"]

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _endpoint(self) -> str:
        if not self.configured:
            raise WeatherPersistenceError("Weather backend is not configured")
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def upsert(self, sample: WeatherSample) -> None:
        """Insert or overwrite the row keyed by the sample's location."""
        url = self._endpoint()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    params={"on_conflict": "location"},
                    json=sample.to_row(),
                    headers=self._headers("resolution=merge-duplicates,return=minimal"),
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise WeatherPersistenceError(
                            f"Upsert for {sample.location} failed with {response.status}: {body}"
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WeatherPersistenceError(f"Upsert for {sample.location} failed: {str(e) or type(e).__name__}") from e

    async def latest(self, location: str) -> Optional[Dict[str, Any]]:
        """Get the most recently updated row for a location, if any."""
        url = self._endpoint()
        params = {
            "select": "*",
            "location": f"eq.{location}",
            "order": "updated_at.desc",
            "limit": "1"
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    params=params,
                    headers=self._headers(),
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise WeatherPersistenceError(
                            f"Read for {location} failed with {response.status}: {body}"
                        )
                    rows = await response.json()
                    return rows[0] if rows else None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WeatherPersistenceError(f"Read for {location} failed: {str(e) or type(e).__name__}") from e
