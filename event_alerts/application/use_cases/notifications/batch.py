"""Batch run that notifies users about upcoming events in their districts."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from event_alerts.config import get_settings
from event_alerts.domain.entities import Event, UserProfile
from event_alerts.domain.exceptions import MatchEvaluationError, SourceUnavailableError
from event_alerts.infrastructure.notifications import NotificationSink, realtime_sink
from event_alerts.infrastructure.repositories import EventRepository, UserProfileRepository
from event_alerts.utils import ensure_app_timezone, now_in_app_timezone

from .dispatch import DispatchOutcome, DispatchStatus, try_dispatch
from .geography import DistrictResolver, get_district_resolver
from .matching import is_eligible, select_window, window_bounds
from .messages import compose_message

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RunState(str, Enum):
    IDLE = "idle"
    FETCHING_CANDIDATES = "fetching_candidates"
    FETCHING_USERS = "fetching_users"
    MATCHING = "matching"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunSummary:
    """Counters describing one batch run.

    ``notifications_created`` counts ledger entries written by the run, including
    entries whose delivery failed; those pairs are also counted in ``failed``.
    """

    events_considered: int = 0
    users_considered: int = 0
    pairs_evaluated: int = 0
    notifications_created: int = 0
    already_notified: int = 0
    failed: int = 0
    duration_ms: int = 0
    stopped_early: bool = False

    def record(self, outcome: DispatchOutcome) -> None:
        if outcome.ledger_written:
            self.notifications_created += 1
        if outcome.status is DispatchStatus.ALREADY_EXISTS:
            self.already_notified += 1
        elif outcome.status is DispatchStatus.FAILED:
            self.failed += 1

    def as_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class _Audience:
    user_id: str
    localities: frozenset[str]
    error: str | None = None


class EventNotificationBatch:
    """Drive one pass over the (candidate event, user) cross-product.

    Every pair uses its own short-lived session so pairs never share a
    transaction; the ledger's unique constraint is the only synchronisation
    between workers and between overlapping runs.
    """

    def __init__(
        self,
        session_factory: sessionmaker | Callable[[], Session],
        sink: NotificationSink,
        resolver: DistrictResolver,
        *,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._session_factory = session_factory
        self._sink = sink
        self._resolver = resolver
        self._max_workers = max_workers
        self._stop_requested = threading.Event()
        self.state = RunState.IDLE

    def request_stop(self) -> None:
        """Stop the current run, or the next one, before its next pair is processed."""

        self._stop_requested.set()

    def run(self, *, now: datetime | None = None, horizon_days: int) -> RunSummary:
        """Execute one batch run and return its summary.

        Raises :class:`SourceUnavailableError` when events or users cannot be read.
        """

        started = time.monotonic()
        now = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
        try:
            summary = self._execute(now, horizon_days)
        finally:
            # A stop request made before or during this run applies to it only.
            self._stop_requested.clear()
        summary.duration_ms = int((time.monotonic() - started) * 1000)
        self.state = RunState.DONE
        logger.info(
            "Sent %d notifications for %d events (%d already notified, %d failed) in %d ms",
            summary.notifications_created,
            summary.events_considered,
            summary.already_notified,
            summary.failed,
            summary.duration_ms,
        )
        self.state = RunState.IDLE
        return summary

    def _execute(self, now: datetime, horizon_days: int) -> RunSummary:
        summary = RunSummary()

        self.state = RunState.FETCHING_CANDIDATES
        events = self._fetch(
            "events",
            lambda session: self._load_candidates(session, now, horizon_days),
        )
        summary.events_considered = len(events)
        logger.info("Found %d upcoming events", len(events))

        self.state = RunState.FETCHING_USERS
        profiles = self._fetch(
            "user profiles",
            lambda session: UserProfileRepository(session).list_profiles(),
        )
        audiences = [self._audience(profile) for profile in profiles]
        summary.users_considered = len(audiences)

        self.state = RunState.MATCHING
        if self._max_workers == 1:
            outcomes = map(self._process_pair, self._pairs(events, audiences, now))
            for outcome in outcomes:
                self._tally(summary, outcome)
        else:
            with ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="event-notify"
            ) as executor:
                for chunk in _chunked(
                    self._pairs(events, audiences, now), self._max_workers * 4
                ):
                    for outcome in executor.map(self._process_pair, chunk):
                        self._tally(summary, outcome)

        summary.stopped_early = self._stop_requested.is_set()
        return summary

    def _fetch(self, label: str, loader: Callable[[Session], Sequence[T]]) -> Sequence[T]:
        try:
            with self._session_factory() as session:
                return loader(session)
        except SQLAlchemyError as exc:
            self.state = RunState.FAILED
            logger.error("Error fetching %s: %s", label, exc)
            raise SourceUnavailableError(f"Could not read {label}: {exc}") from exc

    @staticmethod
    def _load_candidates(
        session: Session, now: datetime, horizon_days: int
    ) -> list[Event]:
        first, last = window_bounds(now, horizon_days)
        events = EventRepository(session).list_between(first, last)
        return select_window(events, now, horizon_days)

    def _audience(self, profile: UserProfile) -> _Audience:
        try:
            districts = profile.declared_districts()
        except MatchEvaluationError as exc:
            logger.warning("Skipping malformed profile %s: %s", profile.id, exc)
            return _Audience(profile.id, frozenset(), error=str(exc))
        return _Audience(profile.id, self._resolver.resolve(districts))

    def _pairs(
        self, events: Sequence[Event], audiences: Sequence[_Audience], now: datetime
    ) -> Iterator[tuple[Event, _Audience, datetime]]:
        for event in events:
            for audience in audiences:
                if self._stop_requested.is_set():
                    logger.info("Stop requested; leaving remaining pairs for the next run")
                    return
                yield event, audience, now

    def _process_pair(
        self, pair: tuple[Event, _Audience, datetime]
    ) -> DispatchOutcome | None:
        event, audience, now = pair
        if audience.error is not None:
            return DispatchOutcome(DispatchStatus.FAILED, reason=audience.error)
        try:
            if not is_eligible(event, audience.localities):
                return None
            message = compose_message(event, now)
            with self._session_factory() as session:
                return try_dispatch(
                    session,
                    self._sink,
                    user_id=audience.user_id,
                    event_id=event.id,
                    message=message,
                )
        except MatchEvaluationError as exc:
            logger.warning(
                "Skipping event %s for user %s: %s", event.id, audience.user_id, exc
            )
            return DispatchOutcome(DispatchStatus.FAILED, reason=str(exc))
        except Exception as exc:
            logger.exception(
                "Error processing event %s for user %s", event.id, audience.user_id
            )
            return DispatchOutcome(DispatchStatus.FAILED, reason=str(exc))

    @staticmethod
    def _tally(summary: RunSummary, outcome: DispatchOutcome | None) -> None:
        summary.pairs_evaluated += 1
        if outcome is not None:
            summary.record(outcome)


def _chunked(items: Iterator[T], size: int) -> Iterator[list[T]]:
    chunk: list[T] = []
    for item in items:
        chunk.append(item)
        if len(chunk) >= size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def run_event_notifications(
    *,
    now: datetime | None = None,
    horizon_days: int | None = None,
    session_factory: sessionmaker | Callable[[], Session] | None = None,
    sink: NotificationSink | None = None,
    resolver: DistrictResolver | None = None,
) -> RunSummary:
    """Run one notification batch with the configured defaults."""

    settings = get_settings()
    if session_factory is None:
        from event_alerts.infrastructure.database import SessionLocal

        session_factory = SessionLocal
    batch = EventNotificationBatch(
        session_factory,
        sink or realtime_sink,
        resolver or get_district_resolver(),
        max_workers=settings.notification_max_workers,
    )
    return batch.run(
        now=now,
        horizon_days=horizon_days if horizon_days is not None else settings.notification_horizon_days,
    )


__all__ = [
    "EventNotificationBatch",
    "RunState",
    "RunSummary",
    "run_event_notifications",
]
