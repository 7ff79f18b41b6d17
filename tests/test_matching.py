"""Tests for the candidate window and the locality match policy."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from event_alerts.application.use_cases.notifications import (
    is_eligible,
    select_window,
    window_bounds,
)
from event_alerts.domain.entities import Event, UserProfile
from event_alerts.domain.exceptions import MatchEvaluationError

MANILA = ZoneInfo("Asia/Manila")
NOW = datetime(2025, 1, 1, 9, 30, tzinfo=MANILA)


def _event(event_id: str, event_date: date | None, municipality=None, location="") -> Event:
    return Event(
        id=event_id,
        name=f"Event {event_id}",
        event_date=event_date,
        location=location,
        municipality=municipality,
    )


def test_window_is_inclusive_on_both_ends():
    events = [
        _event("yesterday", date(2024, 12, 31)),
        _event("today", date(2025, 1, 1)),
        _event("last", date(2025, 1, 4)),
        _event("beyond", date(2025, 1, 5)),
        _event("undated", None),
    ]

    selected = select_window(events, NOW, 3)

    assert [event.id for event in selected] == ["today", "last"]


def test_window_uses_the_app_calendar_date():
    # 20:00 UTC on Dec 31 is already Jan 1 in Manila.
    late_utc = datetime(2024, 12, 31, 20, 0, tzinfo=ZoneInfo("UTC"))

    assert window_bounds(late_utc, 3) == (date(2025, 1, 1), date(2025, 1, 4))


def test_window_is_repeatable():
    events = [_event("a", date(2025, 1, 2)), _event("b", date(2025, 1, 3))]

    assert select_window(events, NOW, 3) == select_window(events, NOW, 3)


def test_negative_horizon_is_rejected():
    with pytest.raises(ValueError):
        window_bounds(NOW, -1)


def test_user_in_matching_district_is_eligible(resolver):
    event = _event("fiesta", date(2025, 1, 2), municipality="Tiwi")

    assert is_eligible(event, resolver.resolve(["District 1"])) is True
    assert is_eligible(event, resolver.resolve(["District 2"])) is False


@pytest.mark.parametrize(
    ("municipality", "location", "expected"),
    [
        ("Tabaco City", "", True),
        ("  TIWI ", "", True),
        (None, "Poblacion, Malinao", True),
        ("", "Legazpi Boulevard", False),
        (None, "", False),
    ],
)
def test_substring_and_case_insensitive_matching(municipality, location, expected):
    event = _event("e", date(2025, 1, 2), municipality=municipality, location=location)

    assert is_eligible(event, {"Tabaco", "tiwi", "Malinao"}) is expected


def test_empty_locality_set_never_matches():
    event = _event("e", date(2025, 1, 2), municipality="Tiwi")

    assert is_eligible(event, set()) is False


@pytest.mark.parametrize(
    "answers",
    [{"districts": "District 1"}, {"districts": ["District 1", 2]}, ["District 1"]],
)
def test_malformed_declared_districts_raise(answers):
    profile = UserProfile(id="u1", onboarding_answers=answers)

    with pytest.raises(MatchEvaluationError):
        profile.declared_districts()


def test_missing_declared_districts_are_empty():
    assert UserProfile(id="u1", onboarding_answers={}).declared_districts() == ()
    assert UserProfile(
        id="u2", onboarding_answers={"districts": ["District 2"]}
    ).declared_districts() == ("District 2",)


def test_malformed_event_locality_raises():
    event = _event("e", date(2025, 1, 2), municipality=42)

    with pytest.raises(MatchEvaluationError):
        is_eligible(event, {"Tiwi"})
