"""Composition of user-facing event notification texts."""

from __future__ import annotations

import math
from datetime import datetime

from event_alerts.domain.entities import Event
from event_alerts.domain.exceptions import MatchEvaluationError
from event_alerts.utils import ensure_app_timezone, start_of_app_day

NOTIFICATION_TITLE = "Upcoming event"
_SECONDS_PER_DAY = 24 * 60 * 60


def days_until(event: Event, now: datetime) -> int:
    """Return the whole days left before ``event`` starts, never negative."""

    if event.event_date is None:
        raise MatchEvaluationError(f"Event {event.id} has no date")
    starts_at = start_of_app_day(event.event_date)
    delta = starts_at - ensure_app_timezone(now)
    return max(0, math.ceil(delta.total_seconds() / _SECONDS_PER_DAY))


def compose_message(event: Event, now: datetime) -> str:
    days = days_until(event, now)
    suffix = "" if days == 1 else "s"
    return (
        f"🎉 {event.name} starts in {days} day{suffix} in "
        f"{event.display_location()}! Don't miss it!"
    )


__all__ = ["NOTIFICATION_TITLE", "compose_message", "days_until"]
