"""Calendar arithmetic in the timezone the event catalogue is published in.

Event dates carry no time of day. They are read as calendar days in
``APP_TIMEZONE``, so "today", the notification window and the day count in a
message are all measured against that zone's midnight.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from event_alerts.config import get_settings

FALLBACK_TIMEZONE: Final[str] = "Asia/Manila"
# Accepts "UTC+8", "GMT-03:30" and "UTC+0530".
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Zone named by ``APP_TIMEZONE``; unknown names fall back to Manila time."""

    name = (get_settings().app_timezone or "").strip()
    return _zone_from_name(name or FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app zone; naive values are taken as app-local."""

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """App-local wall time with ``tzinfo`` stripped, as the ledger columns store it."""

    local = ensure_app_timezone(value)
    return None if local is None else local.replace(tzinfo=None)


def app_calendar_date(value: datetime) -> date:
    """Day on the app calendar that ``value`` falls on."""

    if value.tzinfo is None:
        return value.date()
    return value.astimezone(get_app_timezone()).date()


def start_of_app_day(day: date) -> datetime:
    """Midnight opening ``day`` on the app calendar."""

    return datetime.combine(day, time.min, tzinfo=get_app_timezone())


def _zone_from_name(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass
    match = _FIXED_OFFSET.match(name)
    if match is None:
        return ZoneInfo(FALLBACK_TIMEZONE)
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)
