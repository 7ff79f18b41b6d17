"""Aggregate application use cases."""

from .notifications import list_upcoming_events_for_user, run_event_notifications

__all__ = [
    "list_upcoming_events_for_user",
    "run_event_notifications",
]
