"""Utility helpers for reusable functionality."""

from .datetime import (
    app_calendar_date,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
    start_of_app_day,
)

__all__ = [
    "app_calendar_date",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
    "start_of_app_day",
]
