import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from features.common.exceptions.conditions_exceptions import LocationNotFoundError
from features.weather.models.weather_types import (
    ClimateHistoryResponse,
    HourlyOutlook,
    SunTimes,
    WeatherResponse,
    WeatherSample
)
from features.weather.services.climate_service import ClimateService
from features.weather.services.stored_weather_service import StoredWeatherService
from features.weather.services.weather_service import WeatherService

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Weather"],
    responses={
        404: {"description": "City not found"},
        500: {"description": "Failed to fetch weather data"}
    }
)

def get_weather_service(request: Request) -> WeatherService:
    """Get WeatherService instance from app state."""
    return request.app.state.weather_service

def get_climate_service(request: Request) -> ClimateService:
    """Get ClimateService instance from app state."""
    return request.app.state.climate_service

def get_stored_service(request: Request) -> StoredWeatherService:
    """Get StoredWeatherService instance from app state."""
    return request.app.state.stored_weather_service

def update_requested(value: Optional[str]) -> bool:
    """Only the literal 'true' (any case) enables the upsert."""
    return (value or "").strip().lower() == "true"

def city_not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "City not found"})

def fetch_failed(e: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to fetch weather data", "details": str(e)}
    )

@router.get(
    "/get-weather",
    response_model=WeatherResponse,
    summary="Get weather for Alaska cities",
    description="Returns weather for one city, or all known cities when no city is given; optionally upserts into the weather table"
)
async def get_weather(
    city: Optional[str] = Query(None, description="City name (case-insensitive)"),
    update: Optional[str] = Query(None, description="'true' upserts the samples into the weather table; any other value is ignored"),
    service: WeatherService = Depends(get_weather_service)
):
    """Get weather samples."""
    try:
        return await service.get_weather(city=city, update=update_requested(update))
    except LocationNotFoundError:
        return city_not_found()
    except Exception as e:
        logger.error(f"Error fetching weather: {str(e)}")
        return fetch_failed(e)

@router.get(
    "/weather/sun",
    response_model=SunTimes,
    summary="Get approximate sunrise and sunset",
    description="Returns approximate Anchorage sunrise and sunset times for the current month"
)
async def get_sun_times(
    weather_service: WeatherService = Depends(get_weather_service),
    climate_service: ClimateService = Depends(get_climate_service)
) -> SunTimes:
    return climate_service.sun_times(weather_service.now())

@router.get(
    "/weather/history",
    response_model=ClimateHistoryResponse,
    summary="Get climate history",
    description="Returns Anchorage climate normals and this-day-in-history statistics"
)
async def get_climate_history(
    weather_service: WeatherService = Depends(get_weather_service),
    climate_service: ClimateService = Depends(get_climate_service)
) -> ClimateHistoryResponse:
    return climate_service.history(weather_service.now())

@router.get(
    "/weather/{city}/current",
    response_model=WeatherSample,
    summary="Get stored weather for a city",
    description="Returns the latest row of the weather table for the city, or a synthesized sample when none is stored"
)
async def get_current_weather(
    city: str,
    service: StoredWeatherService = Depends(get_stored_service)
):
    try:
        return await service.get_current(city)
    except LocationNotFoundError:
        return city_not_found()
    except Exception as e:
        logger.error(f"Error reading stored weather for {city}: {str(e)}")
        return fetch_failed(e)

@router.get(
    "/weather/{city}/hourly",
    response_model=HourlyOutlook,
    summary="Get a 24-hour outlook for a city",
    description="Returns a 24-hour temperature outlook derived from a current weather sample"
)
async def get_hourly_outlook(
    city: str,
    weather_service: WeatherService = Depends(get_weather_service),
    climate_service: ClimateService = Depends(get_climate_service)
):
    try:
        location = weather_service.resolve(city)
    except LocationNotFoundError:
        return city_not_found()
    now = weather_service.now()
    sample = weather_service.generate_sample(location, now)
    return climate_service.hourly_outlook(sample, now)
