class AlaskaConditionsError(Exception):
    """Base exception for conditions service errors."""
    pass

class LocationNotFoundError(AlaskaConditionsError):
    """Raised when a requested city is not in the known location list."""

    def __init__(self, city: str):
        super().__init__(f"City not found: {city}")
        self.city = city

class WeatherPersistenceError(AlaskaConditionsError):
    """Raised when the hosted weather table cannot be read or written."""
    pass

class WeatherSourceError(AlaskaConditionsError):
    """Raised when a live weather source returns an unusable response."""
    pass
