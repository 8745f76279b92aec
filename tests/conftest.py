"""
pytest configuration

- no scheduler and no hosted backend unless a test wires a fake one in
- deterministic randomness through seeded random.Random instances
"""

import os

os.environ["ALASKA_SCHEDULER_ENABLED"] = "false"
os.environ["ALASKA_SUPABASE_URL"] = ""
os.environ["ALASKA_SUPABASE_SERVICE_ROLE_KEY"] = ""
os.environ["ALASKA_WEATHER_SOURCE"] = "synthetic"

import random
from typing import Dict, List, Optional, Set

import pytest

from core.cache import get_cache
from core.config import settings
from features.common.exceptions.conditions_exceptions import WeatherPersistenceError
from features.weather.models.weather_types import WeatherSample
from features.weather.services.weather_service import WeatherService
from repositories.location_repo import LocationRepository


class FakeWeatherRepository:
    """In-memory stand-in for the hosted weather table."""

    def __init__(self, fail_for: Optional[Set[str]] = None, configured: bool = True):
        self.rows: Dict[str, dict] = {}
        self.upserts: List[str] = []
        self.reads: List[str] = []
        self.fail_for = fail_for or set()
        self.configured = configured

    async def upsert(self, sample: WeatherSample) -> None:
        if sample.location in self.fail_for:
            raise WeatherPersistenceError(f"Upsert for {sample.location} failed with 503")
        self.upserts.append(sample.location)
        self.rows[sample.location] = sample.to_row()

    async def latest(self, location: str) -> Optional[dict]:
        self.reads.append(location)
        return self.rows.get(location)


@pytest.fixture
def location_repo():
    return LocationRepository(settings.cities_file)


@pytest.fixture
def make_repo():
    return FakeWeatherRepository


@pytest.fixture
def fake_repo(make_repo):
    return make_repo()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def weather_service(location_repo, fake_repo, rng):
    return WeatherService(
        location_repo=location_repo,
        weather_repo=fake_repo,
        source="synthetic",
        rng=rng
    )


@pytest.fixture
async def clear_view_cache():
    cache = get_cache()
    await cache.clear()
    yield cache
    await cache.clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as test_client:
        yield test_client
