from pathlib import Path
import json
from typing import List, Optional

from features.common.models.location_types import Location

class LocationRepository:
    def __init__(self, locations_file: Path):
        self.locations_file = locations_file
        self._locations: Optional[List[Location]] = None

    def load_locations(self) -> List[Location]:
        if self._locations is None:
            with open(self.locations_file, encoding="utf-8") as f:
                self._locations = [Location(**entry) for entry in json.load(f)]
        return self._locations

    def find(self, name: str) -> Optional[Location]:
        """Case-insensitive lookup by display name or alias.

        Args:
            name: City name as supplied by the caller

        Returns:
            The matching Location, or None if the name is unknown
        """
        return next((loc for loc in self.load_locations() if loc.matches(name)), None)
