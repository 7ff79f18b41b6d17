"""Shared fixtures for the test suite."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "Asia/Manila")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from event_alerts.application.use_cases.notifications import DistrictResolver
from event_alerts.domain.districts import DEFAULT_DISTRICT_LOCALITIES
from event_alerts.domain.entities import Notification
from event_alerts.domain.exceptions import SinkDeliveryError
from event_alerts.infrastructure.database import Base, initialize_database
from event_alerts.infrastructure.models import EventModel, NotificationModel, ProfileModel


class RecordingSink:
    """Sink that remembers what it was asked to deliver."""

    def __init__(self, failing_users: set[str] | None = None) -> None:
        self.sent: list[Notification] = []
        self.failing_users = failing_users or set()

    def send(self, notification: Notification) -> None:
        if notification.user_id in self.failing_users:
            raise SinkDeliveryError("push gateway timed out")
        self.sent.append(notification)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def file_engine(tmp_path):
    """Engine on a file database, for tests that write from several threads."""

    engine = create_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture()
def resolver() -> DistrictResolver:
    return DistrictResolver(DEFAULT_DISTRICT_LOCALITIES)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


def add_event(
    session,
    event_id: str,
    *,
    event_date: date | None,
    municipality: str | None = None,
    location: str = "",
    name: str | None = None,
) -> EventModel:
    model = EventModel(
        id=event_id,
        name=name or f"Event {event_id}",
        event_date=event_date,
        municipality=municipality,
        location=location,
    )
    session.add(model)
    session.commit()
    return model


def add_profile(session, user_id: str, districts=None, *, answers=None) -> ProfileModel:
    if answers is None:
        answers = {"districts": districts} if districts is not None else {}
    model = ProfileModel(id=user_id, onboarding_answers=answers)
    session.add(model)
    session.commit()
    return model


def ledger_pairs(session) -> list[tuple[str, str]]:
    rows = session.query(NotificationModel.user_id, NotificationModel.event_id).all()
    return sorted((user_id, event_id) for user_id, event_id in rows)
