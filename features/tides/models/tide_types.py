from datetime import datetime
from enum import Enum
from typing import List
from pydantic import BaseModel, Field

class TideType(str, Enum):
    HIGH = "high"
    LOW = "low"

class TideTrend(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    SLACK = "slack"

class TidePoint(BaseModel):
    """Single high or low tide event"""
    time: str = Field(..., description="Local clock time, HH:MM")
    height: float = Field(..., description="Height of tide in feet")
    type: TideType

class TideCurrent(BaseModel):
    """Tide state at the time of generation"""
    height: float = Field(..., description="Current height in feet")
    trend: TideTrend
    next_event: TidePoint

class TideConditions(BaseModel):
    """Water conditions shown beside the tide curve"""
    water_temp: int = Field(..., description="Water temperature in °F")
    visibility: str
    current_speed: str = Field(..., description="Current speed, e.g. '2.4 knots'")

class TideSnapshot(BaseModel):
    """Complete tide snapshot for one location"""
    location: str
    current: TideCurrent
    tides: List[TidePoint] = Field(..., description="Next four tide events, alternating high/low")
    conditions: TideConditions
    generated_at: datetime
