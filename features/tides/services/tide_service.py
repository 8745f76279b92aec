import logging
import math
import random
from datetime import datetime
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from core.config import settings
from features.common.utils.conversions import UnitConversions
from features.tides.models.tide_types import (
    TideConditions,
    TideCurrent,
    TidePoint,
    TideSnapshot,
    TideTrend,
    TideType
)

logger = logging.getLogger(__name__)

# Semi-diurnal period approximation (6 h 12 min)
TIDE_PERIOD_MINUTES = 372
DAY_MS = 86_400_000
EVENT_SPACING_HOURS = 6
EVENT_COUNT = 4
SLACK_THRESHOLD = 0.1
VISIBILITY_LEVELS = ["Good", "Moderate", "Limited"]

def tide_phase(now: datetime) -> float:
    """Phase angle of the tide curve for the local time of day."""
    return ((now.hour * 60 + now.minute) / TIDE_PERIOD_MINUTES) * 2 * math.pi

def tide_trend(phase: float) -> TideTrend:
    """Slack near the turn, otherwise rising while the curve's slope is positive."""
    slope = math.cos(phase)
    if abs(slope) < SLACK_THRESHOLD:
        return TideTrend.SLACK
    return TideTrend.RISING if slope > 0 else TideTrend.FALLING

def base_tide_levels(now: datetime) -> Tuple[float, float]:
    """Slowly drifting (high, low) reference levels driven by the absolute epoch."""
    drift = math.sin(now.timestamp() * 1000 / DAY_MS)
    return 28 + drift * 4, 2 + drift * 2

class TideService:
    """Synthetic tide curve for Cook Inlet at Anchorage Harbor.

    Cook Inlet has some of the largest tidal ranges in North America, so the
    reference levels sit around 28 ft (high) and 2 ft (low). Values are
    decorative and must not be used for navigation.
    """

    LOCATION = "Cook Inlet (Anchorage Harbor)"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.tz = ZoneInfo(settings.timezone)

    def compute_snapshot(
        self,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> TideSnapshot:
        """Build a tide snapshot for the given instant.

        Args:
            now: Instant to compute for; naive values are taken as local time
            rng: Random source for event jitter and water conditions

        Returns:
            TideSnapshot with current height, trend and the next four events
        """
        rng = rng or self.rng
        now = self._localize(now)

        base_high, base_low = base_tide_levels(now)
        phase = tide_phase(now)
        amplitude = (base_high - base_low) / 2
        mean = (base_high + base_low) / 2
        current_height = amplitude * math.sin(phase) + mean

        tides = self._upcoming_events(now, base_high, base_low, rng)

        return TideSnapshot(
            location=self.LOCATION,
            current=TideCurrent(
                height=UnitConversions.round_half_up(current_height, 1),
                trend=tide_trend(phase),
                next_event=tides[0]
            ),
            tides=tides,
            conditions=TideConditions(
                water_temp=38 + rng.randrange(5),
                visibility=rng.choice(VISIBILITY_LEVELS),
                current_speed=f"{1 + rng.random() * 3:.1f} knots"
            ),
            generated_at=now
        )

    def _upcoming_events(
        self,
        now: datetime,
        base_high: float,
        base_low: float,
        rng: random.Random
    ) -> List[TidePoint]:
        # Events follow a fixed 6-hour cadence and are not fitted to the current curve
        first_hour = ((now.hour // EVENT_SPACING_HOURS) * EVENT_SPACING_HOURS + EVENT_SPACING_HOURS) % 24
        events = []
        for i in range(EVENT_COUNT):
            hour = (first_hour + i * EVENT_SPACING_HOURS) % 24
            is_high = i % 2 == 0
            height = base_high - rng.random() * 3 if is_high else base_low + rng.random() * 2
            events.append(TidePoint(
                time=f"{hour:02d}:{rng.randrange(60):02d}",
                height=UnitConversions.round_half_up(height, 1),
                type=TideType.HIGH if is_high else TideType.LOW
            ))
        return events

    def _localize(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(self.tz)
        if now.tzinfo is None:
            return now.replace(tzinfo=self.tz)
        return now.astimezone(self.tz)
