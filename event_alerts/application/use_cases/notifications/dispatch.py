"""Ledger-guarded creation and delivery of event notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from event_alerts.domain.entities import Notification
from event_alerts.domain.exceptions import SinkDeliveryError
from event_alerts.infrastructure.notifications import NotificationSink
from event_alerts.infrastructure.repositories import NotificationRepository
from event_alerts.utils import now_in_app_timezone

from .messages import NOTIFICATION_TITLE

logger = logging.getLogger(__name__)


class DispatchStatus(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of a single :func:`try_dispatch` call."""

    status: DispatchStatus
    reason: str | None = None
    notification: Notification | None = None

    @property
    def ledger_written(self) -> bool:
        """``True`` when this call inserted the ledger entry."""

        return self.status is not DispatchStatus.ALREADY_EXISTS and self.notification is not None


def try_dispatch(
    session: Session,
    sink: NotificationSink,
    *,
    user_id: str,
    event_id: str,
    message: str,
    title: str = NOTIFICATION_TITLE,
) -> DispatchOutcome:
    """Record a notification for ``(user_id, event_id)`` once and deliver it.

    The ledger's unique constraint decides races between concurrent runs: the
    loser sees an :class:`IntegrityError` and reports ``ALREADY_EXISTS``. Sink
    failures never undo the ledger entry, so each pair is delivered at most once.
    """

    repository = NotificationRepository(session)
    try:
        if repository.get_for_pair(user_id=user_id, event_id=event_id) is not None:
            return DispatchOutcome(DispatchStatus.ALREADY_EXISTS)

        saved = repository.create(
            Notification(
                id=None,
                user_id=user_id,
                event_id=event_id,
                title=title,
                message=message,
                created_at=now_in_app_timezone(),
                read_at=None,
            )
        )
    except IntegrityError:
        session.rollback()
        logger.debug(
            "Notification for user %s and event %s was created concurrently",
            user_id,
            event_id,
        )
        return DispatchOutcome(DispatchStatus.ALREADY_EXISTS)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(
            "Could not record notification for user %s and event %s: %s",
            user_id,
            event_id,
            exc,
        )
        return DispatchOutcome(DispatchStatus.FAILED, reason=f"ledger: {exc}")

    try:
        sink.send(saved)
    except SinkDeliveryError as exc:
        logger.warning(
            "Delivery of notification %s to user %s failed: %s", saved.id, user_id, exc
        )
        return DispatchOutcome(
            DispatchStatus.FAILED, reason=f"delivery: {exc}", notification=saved
        )
    except Exception as exc:
        logger.exception(
            "Unexpected error delivering notification %s to user %s", saved.id, user_id
        )
        return DispatchOutcome(
            DispatchStatus.FAILED, reason=f"delivery: {exc}", notification=saved
        )

    return DispatchOutcome(DispatchStatus.CREATED, notification=saved)


__all__ = ["DispatchOutcome", "DispatchStatus", "try_dispatch"]
