import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from datetime import datetime
from typing import Optional

from core.config import settings
from features.weather.services.weather_service import WeatherService

logger = logging.getLogger(__name__)

WEATHER_REFRESH_JOB = "weather_refresh"

class Scheduler:
    def __init__(self, weather_service: WeatherService, refresh_minutes: Optional[int] = None):
        self.scheduler = AsyncIOScheduler(timezone=settings.timezone)
        self.weather_service = weather_service
        self.refresh_minutes = refresh_minutes or settings.weather_refresh_minutes

    async def refresh_weather(self) -> int:
        """Generate weather for every city and upsert it; returns the number of samples."""
        try:
            response = await self.weather_service.get_weather(update=True)
            return response.count
        except Exception as e:
            logger.error(f"Error refreshing weather: {str(e)}")
            return 0

    def start(self):
        """Start the scheduler with configured jobs."""
        logger.info("Starting scheduler")

        self.scheduler.add_job(
            self.refresh_weather,
            IntervalTrigger(minutes=self.refresh_minutes),
            id=WEATHER_REFRESH_JOB,
            name=WEATHER_REFRESH_JOB,
            next_run_time=datetime.now(self.scheduler.timezone)
        )

        self.scheduler.start()
        logger.info(f"Scheduler started, weather refresh every {self.refresh_minutes} minutes")

    def get_next_run_time(self, job_id: str) -> Optional[str]:
        """Get the next run time for a scheduled job."""
        job = self.scheduler.get_job(job_id)
        if job and job.next_run_time:
            return job.next_run_time.isoformat()
        return None

    def shutdown(self):
        """Shutdown the scheduler."""
        if self.scheduler.running:
            logger.info("Shutting down scheduler")
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler shutdown complete")
