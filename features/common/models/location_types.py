from typing import List
from pydantic import BaseModel, Field

class Location(BaseModel):
    """Named place with fixed coordinates."""
    name: str = Field(..., description="Display name, also the weather table key")
    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")
    aliases: List[str] = Field(default_factory=list, description="Alternate names accepted in lookups")

    def matches(self, name: str) -> bool:
        wanted = name.strip().casefold()
        return wanted == self.name.casefold() or any(wanted == a.casefold() for a in self.aliases)
