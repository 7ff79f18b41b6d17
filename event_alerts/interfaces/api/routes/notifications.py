"""Endpoints that trigger notification runs and stream notifications."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import sessionmaker

from event_alerts.application.use_cases.notifications import (
    DistrictResolver,
    EventNotificationBatch,
)
from event_alerts.config import get_settings
from event_alerts.domain.exceptions import SourceUnavailableError
from event_alerts.infrastructure.database import get_session_factory
from event_alerts.infrastructure.notifications import (
    NotificationSink,
    notification_manager,
    serialize_notification,
)
from event_alerts.infrastructure.repositories import (
    NotificationRepository,
    UserProfileRepository,
)
from event_alerts.interfaces.api.dependencies import get_notification_sink, get_resolver
from event_alerts.interfaces.api.schemas import EventRunSummary

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


@router.post("/event-run", response_model=EventRunSummary)
def run_event_notifications_endpoint(
    horizon_days: int | None = Query(default=None, ge=0),
    now: datetime | None = Query(default=None),
    session_factory: sessionmaker = Depends(get_session_factory),
    sink: NotificationSink = Depends(get_notification_sink),
    resolver: DistrictResolver = Depends(get_resolver),
) -> EventRunSummary:
    """Notify users about events happening within the horizon in their districts."""

    settings = get_settings()
    batch = EventNotificationBatch(
        session_factory,
        sink,
        resolver,
        max_workers=settings.notification_max_workers,
    )
    try:
        summary = batch.run(
            now=now,
            horizon_days=horizon_days
            if horizon_days is not None
            else settings.notification_horizon_days,
        )
    except SourceUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return EventRunSummary(success=True, **summary.as_dict())


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> None:
    """Websocket endpoint that streams notifications to a user."""

    user_id = websocket.query_params.get("user_id")
    if not user_id:
        await websocket.close(code=1008)
        return

    with session_factory() as session:
        if UserProfileRepository(session).get(user_id) is None:
            await websocket.close(code=1008)
            return
        pending_notifications = NotificationRepository(session).list_unread_for_user(
            user_id
        )

    await notification_manager.connect(user_id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(n) for n in pending_notifications],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    with session_factory() as ack_session:
                        NotificationRepository(ack_session).mark_as_read(
                            [i for i in ids if isinstance(i, int)], user_id=user_id
                        )
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user_id, websocket)
    except Exception:
        logger.exception("Notification websocket for user %s failed", user_id)
        notification_manager.disconnect(user_id, websocket)
        raise
