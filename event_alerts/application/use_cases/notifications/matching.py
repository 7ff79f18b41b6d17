"""Candidate window selection and locality matching."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from event_alerts.domain.entities import Event
from event_alerts.domain.exceptions import MatchEvaluationError
from event_alerts.utils import app_calendar_date


def window_bounds(now: datetime, horizon_days: int) -> tuple[date, date]:
    """Return the inclusive ``(first, last)`` calendar dates of the window."""

    if horizon_days < 0:
        raise ValueError("horizon_days must not be negative")
    today = app_calendar_date(now)
    return today, today + timedelta(days=horizon_days)


def select_window(
    events: Iterable[Event], now: datetime, horizon_days: int
) -> list[Event]:
    """Return events dated between today and ``today + horizon_days`` inclusive."""

    first, last = window_bounds(now, horizon_days)
    return [
        event
        for event in events
        if event.event_date is not None and first <= _as_date(event.event_date) <= last
    ]


def is_eligible(event: Event, user_localities: Iterable[str]) -> bool:
    """Return ``True`` when the event's place contains one of ``user_localities``.

    The comparison is a case-insensitive substring test, so ``"Tabaco"`` matches
    an event located in ``"Tabaco City"``.
    """

    try:
        place = event.locality_text().casefold()
    except AttributeError as exc:
        raise MatchEvaluationError(f"Event {event.id} has a malformed locality") from exc
    if not place:
        return False
    for locality in user_localities:
        needle = locality.strip().casefold()
        if needle and needle in place:
            return True
    return False


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


__all__ = ["is_eligible", "select_window", "window_bounds"]
