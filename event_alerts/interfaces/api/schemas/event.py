"""Pydantic models describing catalog events and districts."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class EventRead(BaseModel):
    """Upcoming event shown to a user."""

    id: str
    name: str
    event_date: date
    location: str
    municipality: str | None = None
    description: str | None = None
    event_type: str | None = None
    image_url: str | None = None


class DistrictRead(BaseModel):
    name: str
    localities: list[str]


__all__ = ["DistrictRead", "EventRead"]
