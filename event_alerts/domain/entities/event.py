"""Domain entity representing a scheduled catalog event."""

from dataclasses import dataclass
from datetime import date


@dataclass
class Event:
    """A happening published in the tourism catalog."""

    id: str
    name: str
    event_date: date | None
    location: str
    municipality: str | None = None
    description: str | None = None
    event_type: str | None = None
    image_url: str | None = None

    def locality_text(self) -> str:
        """Return the free-text place used to match users, or ``""``."""

        return (self.municipality or "").strip() or (self.location or "").strip()

    def display_location(self) -> str:
        return (self.location or "").strip() or (self.municipality or "").strip()


__all__ = ["Event"]
