"""Tests for app-calendar datetime helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from event_alerts.utils import (
    app_calendar_date,
    ensure_app_naive_datetime,
    start_of_app_day,
)
from event_alerts.utils.datetime import _zone_from_name

MANILA = ZoneInfo("Asia/Manila")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Asia/Manila", MANILA),
        ("UTC+8", timezone(timedelta(hours=8))),
        ("gmt-03:30", timezone(-timedelta(hours=3, minutes=30))),
        ("UTC+0530", timezone(timedelta(hours=5, minutes=30))),
        ("Mars/Olympus_Mons", MANILA),
    ],
)
def test_zone_from_name(name, expected):
    assert _zone_from_name(name) == expected


def test_app_calendar_date_crosses_midnight_from_utc():
    late_utc = datetime(2025, 1, 1, 17, 30, tzinfo=timezone.utc)

    assert app_calendar_date(late_utc) == date(2025, 1, 2)


def test_naive_values_are_taken_as_app_local():
    naive = datetime(2025, 1, 1, 23, 0)

    assert app_calendar_date(naive) == date(2025, 1, 1)
    assert ensure_app_naive_datetime(naive) == naive


def test_ensure_app_naive_datetime_converts_then_strips():
    utc = datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)

    assert ensure_app_naive_datetime(utc) == datetime(2025, 1, 1, 8, 0)
    assert ensure_app_naive_datetime(None) is None


def test_start_of_app_day():
    assert start_of_app_day(date(2025, 3, 2)) == datetime(2025, 3, 2, tzinfo=MANILA)
