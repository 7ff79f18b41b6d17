"""Registry of open notification websockets, keyed by profile id."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track the websockets each user has open and the loop serving them.

    Websockets are only usable from the event loop that accepted them, so the
    manager remembers that loop for callers running on other threads.
    """

    def __init__(self) -> None:
        self._sockets: defaultdict[str, set[WebSocket]] = defaultdict(set)
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        """Event loop that owns the registered websockets, if any."""

        return self._loop

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._loop = asyncio.get_running_loop()
        self._sockets[user_id].add(websocket)

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if not sockets:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._sockets[user_id]

    def has_connections(self, user_id: str) -> bool:
        return bool(self._sockets.get(user_id))

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> None:
        """Push ``message`` to every socket of ``user_id``; drop sockets that fail."""

        for websocket in list(self._sockets.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.debug("Dropping websocket of user %s: %s", user_id, exc)
                self.disconnect(user_id, websocket)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
