"""Notification sinks that accept composed ledger entries for delivery."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future
from typing import Any, Protocol

from event_alerts.domain.entities import Notification
from event_alerts.domain.exceptions import SinkDeliveryError

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """External transport that receives messages already written to the ledger."""

    def send(self, notification: Notification) -> None:
        """Deliver ``notification`` or raise :class:`SinkDeliveryError`."""


class RealtimeNotificationSink:
    """Push ledger entries to the websocket clients of the recipient.

    ``send`` may be called from any thread. Delivery is scheduled on the loop
    that owns the websockets and is not awaited.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_deliveries(self) -> int:
        """Deliveries scheduled from the loop thread that have not finished."""

        return len(self._tasks)

    def send(self, notification: Notification) -> None:
        user_id = notification.user_id
        if not self._manager.has_connections(user_id):
            logger.debug(
                "User %s has no open connections; entry %s stays in the inbox",
                user_id,
                notification.id,
            )
            return

        loop = self._manager.loop
        if loop is None or loop.is_closed():
            raise SinkDeliveryError(
                f"The loop serving user {user_id} is gone; notification {notification.id} not pushed"
            )

        message = {"type": "notification", "data": serialize_notification(notification)}
        coroutine = self._manager.send_to_user(user_id, message)
        if _running_loop() is loop:
            task = loop.create_task(coroutine)
            self._tasks.add(task)
            task.add_done_callback(self._task_finished)
            return

        try:
            future = asyncio.run_coroutine_threadsafe(coroutine, loop)
        except RuntimeError as exc:
            coroutine.close()
            raise SinkDeliveryError(
                f"Could not schedule notification {notification.id}: {exc}"
            ) from exc
        future.add_done_callback(_log_delivery_error)

    def _task_finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if not task.cancelled():
            _log_delivery_error(task)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _log_delivery_error(future: Future[None] | asyncio.Future[None]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Websocket push failed: %s", exc)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "event_id": notification.event_id,
        "title": notification.title,
        "message": notification.message,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
    }


realtime_sink = RealtimeNotificationSink(notification_manager)


__all__ = [
    "NotificationSink",
    "RealtimeNotificationSink",
    "realtime_sink",
    "serialize_notification",
]
