from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

class WeatherCondition(str, Enum):
    CLEAR = "Clear"
    PARTLY_CLOUDY = "Partly Cloudy"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    SNOW = "Snow"
    THUNDERSTORM = "Thunderstorm"

class WindDirection(str, Enum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

class WeatherSample(BaseModel):
    """Current weather for one location; same shape as a weather table row."""
    location: str = Field(..., description="Location name, unique key of the weather table")
    temperature_f: int = Field(..., description="Current temperature in °F")
    condition: WeatherCondition
    high_f: int = Field(..., description="Daily high in °F")
    low_f: int = Field(..., description="Daily low in °F")
    humidity: int = Field(..., description="Relative humidity in percent")
    wind_mph: int = Field(..., description="Wind speed in mph")
    wind_direction: WindDirection
    updated_at: datetime

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

class WeatherResponse(BaseModel):
    """Response of the get-weather endpoint."""
    success: bool = True
    source: str
    data: List[WeatherSample]
    updated_at: datetime
    count: int

class HourlyPoint(BaseModel):
    hour: int = Field(..., ge=0, le=23, description="Local hour of day")
    label: str = Field(..., description="12-hour clock label, e.g. '3 PM'")
    temperature_f: int
    condition: WeatherCondition

class HourlyOutlook(BaseModel):
    location: str
    points: List[HourlyPoint]

class SunTimes(BaseModel):
    """Approximate sunrise and sunset for Anchorage."""
    sunrise: str
    sunset: str
    month: int

class ClimateNormal(BaseModel):
    month: str
    avg_high: int
    avg_low: int
    record_high: int
    record_low: int
    avg_precip: float = Field(..., description="Average precipitation in inches")
    avg_snow: float = Field(..., description="Average snowfall in inches")

class HistoricRecord(BaseModel):
    year: int
    high: int
    low: int
    condition: str
    precipitation: float
    snowfall: Optional[float] = None
    event: Optional[str] = None

class HistoryStats(BaseModel):
    avg_high: int
    avg_low: int
    record_high: int
    record_low: int
    record_high_year: int
    record_low_year: int

class ClimateHistoryResponse(BaseModel):
    location: str
    month_day: str = Field(..., description="Calendar day the history refers to, e.g. 'October 18'")
    current_normal: ClimateNormal
    normals: List[ClimateNormal]
    records: List[HistoricRecord]
    stats: HistoryStats
