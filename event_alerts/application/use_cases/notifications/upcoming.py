"""Listing of upcoming events that match a user's districts."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from event_alerts.domain.entities import Event, UserProfile
from event_alerts.infrastructure.repositories import EventRepository
from event_alerts.utils import now_in_app_timezone

from .geography import DistrictResolver
from .matching import is_eligible, select_window, window_bounds


def list_upcoming_events_for_user(
    session: Session,
    *,
    profile: UserProfile,
    resolver: DistrictResolver,
    days: int,
    now: datetime | None = None,
) -> Sequence[Event]:
    """Return events in the next ``days`` days located in the user's districts."""

    now = now or now_in_app_timezone()
    localities = resolver.resolve(profile.declared_districts())
    if not localities:
        return []
    first, last = window_bounds(now, days)
    events = EventRepository(session).list_between(first, last)
    candidates = select_window(events, now, days)
    return [event for event in candidates if is_eligible(event, localities)]


__all__ = ["list_upcoming_events_for_user"]
