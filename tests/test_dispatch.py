"""Tests for the ledger-guarded dispatch writer."""

from __future__ import annotations

from datetime import date

from sqlalchemy.exc import OperationalError

from conftest import RecordingSink, add_event, add_profile, ledger_pairs
from event_alerts.application.use_cases.notifications import DispatchStatus, try_dispatch
from event_alerts.domain.entities import Notification
from event_alerts.infrastructure.repositories import NotificationRepository


def _seed(session) -> None:
    add_event(session, "e1", event_date=date(2025, 1, 2), municipality="Tiwi")
    add_profile(session, "u1", ["District 1"])


def test_first_dispatch_creates_entry_and_delivers(session, sink):
    _seed(session)

    outcome = try_dispatch(session, sink, user_id="u1", event_id="e1", message="hello")

    assert outcome.status is DispatchStatus.CREATED
    assert outcome.ledger_written is True
    assert outcome.notification.message == "hello"
    assert [n.event_id for n in sink.sent] == ["e1"]
    assert ledger_pairs(session) == [("u1", "e1")]


def test_repeated_dispatch_reports_existing_entry(session, sink):
    _seed(session)
    try_dispatch(session, sink, user_id="u1", event_id="e1", message="hello")

    outcome = try_dispatch(session, sink, user_id="u1", event_id="e1", message="hello again")

    assert outcome.status is DispatchStatus.ALREADY_EXISTS
    assert outcome.ledger_written is False
    assert len(sink.sent) == 1
    assert ledger_pairs(session) == [("u1", "e1")]


def test_lost_race_on_insert_counts_as_existing(session_factory, session, sink, monkeypatch):
    """A concurrent run inserting between the check and the insert wins cleanly."""

    _seed(session)
    with session_factory() as other:
        NotificationRepository(other).create(
            Notification(
                id=None, user_id="u1", event_id="e1", title="Upcoming event", message="first"
            )
        )
    monkeypatch.setattr(NotificationRepository, "get_for_pair", lambda self, **_: None)

    outcome = try_dispatch(session, sink, user_id="u1", event_id="e1", message="second")

    assert outcome.status is DispatchStatus.ALREADY_EXISTS
    assert sink.sent == []
    assert ledger_pairs(session) == [("u1", "e1")]


def test_sink_failure_keeps_the_ledger_entry(session, caplog):
    _seed(session)
    failing = RecordingSink(failing_users={"u1"})

    with caplog.at_level("WARNING"):
        outcome = try_dispatch(session, failing, user_id="u1", event_id="e1", message="hi")

    assert outcome.status is DispatchStatus.FAILED
    assert outcome.reason.startswith("delivery:")
    assert outcome.ledger_written is True
    assert ledger_pairs(session) == [("u1", "e1")]
    assert "push gateway timed out" in caplog.text

    retry = try_dispatch(session, failing, user_id="u1", event_id="e1", message="hi")
    assert retry.status is DispatchStatus.ALREADY_EXISTS


def test_ledger_write_error_is_reported_as_failure(session, sink, monkeypatch):
    _seed(session)

    def _broken_create(self, notification):
        raise OperationalError("INSERT INTO notification", {}, Exception("disk I/O error"))

    monkeypatch.setattr(NotificationRepository, "create", _broken_create)

    outcome = try_dispatch(session, sink, user_id="u1", event_id="e1", message="hi")

    assert outcome.status is DispatchStatus.FAILED
    assert outcome.reason.startswith("ledger:")
    assert outcome.ledger_written is False
    assert sink.sent == []
