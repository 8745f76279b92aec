from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from core.cache import init_cache
from core.config import settings
from core.logging_config import setup_logging
from core.scheduler import Scheduler, WEATHER_REFRESH_JOB

# Feature routes
from features.tides.routes.tide_routes import router as tide_router
from features.weather.routes.weather_routes import router as weather_router
from features.realtime.routes.realtime_routes import router as realtime_router

# Services and repositories
from features.tides.services.tide_service import TideService
from features.weather.services.weather_service import WeatherService
from features.weather.services.climate_service import ClimateService
from features.weather.services.open_meteo_client import OpenMeteoClient
from features.weather.services.stored_weather_service import StoredWeatherService, STORED_WEATHER_NAMESPACE
from features.realtime.services.invalidation_service import InvalidationService
from repositories.location_repo import LocationRepository
from repositories.weather_repo import WeatherRepository

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        logger.info("🚀 Starting Alaska Conditions API...")

        await init_cache()

        location_repo = LocationRepository(settings.cities_file)
        weather_repo = WeatherRepository()
        if not weather_repo.configured:
            logger.warning("⚠️ Weather backend not configured, updates will be skipped")

        weather_service = WeatherService(
            location_repo=location_repo,
            weather_repo=weather_repo,
            live_client=OpenMeteoClient()
        )
        stored_weather_service = StoredWeatherService(
            weather_service=weather_service,
            weather_repo=weather_repo
        )

        invalidation_service = InvalidationService()
        invalidation_service.register(
            settings.weather_table,
            STORED_WEATHER_NAMESPACE,
            stored_weather_service.invalidate
        )

        # Store services in app state
        app.state.tide_service = TideService()
        app.state.weather_service = weather_service
        app.state.climate_service = ClimateService()
        app.state.stored_weather_service = stored_weather_service
        app.state.invalidation_service = invalidation_service
        app.state.scheduler = None

        if settings.scheduler_enabled and weather_repo.configured:
            app.state.scheduler = Scheduler(weather_service)
            app.state.scheduler.start()

        logger.info("✨ API startup complete - ready to serve requests")
        yield

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise
    finally:
        logger.info("🔄 Shutting down API...")
        if getattr(app.state, "scheduler", None):
            app.state.scheduler.shutdown()
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="Alaska Conditions API",
    description="Weather, tide and climate data for the Alaska news site",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Include feature routers
app.include_router(tide_router)
app.include_router(weather_router)
app.include_router(realtime_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    scheduler = getattr(app.state, "scheduler", None)
    return {
        "status": "healthy",
        "time": datetime.now().isoformat(),
        "next_weather_refresh": scheduler.get_next_run_time(WEATHER_REFRESH_JOB) if scheduler else None
    }

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
