from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, Any, Optional
from pathlib import Path

class Settings(BaseSettings):
    """Application settings."""

    # Local time for tide phase, hour-of-day effects and log timestamps
    timezone: str = "America/Anchorage"

    # Hosted backend (PostgREST) used for the weather table
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    weather_table: str = "weather"

    # "synthetic" or "open-meteo"
    weather_source: str = "synthetic"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    open_meteo_params: Dict[str, Any] = {
        "current": "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m,wind_direction_10m",
        "daily": "temperature_2m_max,temperature_2m_min",
        "temperature_unit": "celsius",
        "wind_speed_unit": "kmh",
        "timezone": "America/Anchorage",
        "forecast_days": 1
    }

    cities_file: Path = Path(__file__).parent.parent / "features" / "weather" / "data" / "alaska_cities.json"

    cache: Dict[str, Any] = {
        "enabled": True,
        "prefix": "alaska_conditions"
    }

    request: Dict = {
        "timeout": 30
    }

    # Periodic weather refresh (upserts into the weather table)
    scheduler_enabled: bool = True
    weather_refresh_minutes: int = 10

    def get_cache_ttl(self) -> Dict[str, Optional[int]]:
        """Get cache TTL values. Stored views are also flushed on realtime notifications."""
        return {
            "tide_snapshot": 60,        # 1 minute (one client timer tick)
            "stored_weather": 300       # 5 minutes (client weather polling interval)
        }

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    model_config = SettingsConfigDict(
        env_prefix="ALASKA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
