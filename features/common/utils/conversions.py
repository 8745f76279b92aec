import math
from typing import Optional, Union

COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

class UnitConversions:
    """Centralized utility for unit conversions across the application."""

    @staticmethod
    def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
        """Round with ties going towards positive infinity (2.5 -> 3, -2.5 -> -2)."""
        factor = 10 ** ndigits
        rounded = math.floor(value * factor + 0.5) / factor
        return int(rounded) if ndigits == 0 else rounded

    @staticmethod
    def celsius_to_fahrenheit(celsius: Optional[float]) -> Optional[int]:
        """Convert Celsius to whole degrees Fahrenheit."""
        if celsius is None:
            return None
        return UnitConversions.round_half_up(celsius * 9 / 5 + 32)

    @staticmethod
    def kmh_to_mph(kmh: Optional[float]) -> Optional[int]:
        """Convert kilometres per hour to whole miles per hour."""
        if kmh is None:
            return None
        return UnitConversions.round_half_up(kmh * 0.621371)  # 1 km/h = 0.621371 mph

    @staticmethod
    def degrees_to_compass(degrees: float) -> str:
        """Convert a bearing to one of eight compass points."""
        return COMPASS_POINTS[UnitConversions.round_half_up((degrees % 360) / 45) % 8]
