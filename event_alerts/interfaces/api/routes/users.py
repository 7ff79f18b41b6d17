"""Per-user notification inbox and upcoming events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from event_alerts.application.use_cases.notifications import (
    DistrictResolver,
    list_upcoming_events_for_user,
)
from event_alerts.config import get_settings
from event_alerts.domain.entities import Event, Notification, UserProfile
from event_alerts.domain.exceptions import MatchEvaluationError
from event_alerts.infrastructure.database import get_db
from event_alerts.infrastructure.repositories import NotificationRepository
from event_alerts.interfaces.api.dependencies import get_profile_or_404, get_resolver
from event_alerts.interfaces.api.schemas import (
    EventRead,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/users", tags=["users"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        event_id=notification.event_id,
        title=notification.title,
        message=notification.message,
        created_at=notification.created_at,
        read_at=notification.read_at,
    )


def _event_to_schema(event: Event) -> EventRead:
    return EventRead(
        id=event.id,
        name=event.name,
        event_date=event.event_date,
        location=event.location,
        municipality=event.municipality,
        description=event.description,
        event_type=event.event_type,
        image_url=event.image_url,
    )


@router.get("/{user_id}/notifications", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, gt=0, le=200),
    db: Session = Depends(get_db),
    profile: UserProfile = Depends(get_profile_or_404),
) -> list[NotificationRead]:
    """Return the most recent notifications recorded for the user."""

    repository = NotificationRepository(db)
    if unread_only:
        notifications = repository.list_unread_for_user(profile.id, limit=limit)
    else:
        notifications = repository.list_for_user(profile.id, limit=limit)
    return [_notification_to_schema(notification) for notification in notifications]


@router.post(
    "/{user_id}/notifications/read", response_model=NotificationMarkReadResponse
)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    profile: UserProfile = Depends(get_profile_or_404),
) -> NotificationMarkReadResponse:
    updated = NotificationRepository(db).mark_as_read(
        payload.unique_ids(), user_id=profile.id
    )
    return NotificationMarkReadResponse(updated=updated)


@router.get("/{user_id}/upcoming-events", response_model=list[EventRead])
def list_upcoming_events(
    days: int | None = Query(default=None, gt=0, le=365),
    db: Session = Depends(get_db),
    profile: UserProfile = Depends(get_profile_or_404),
    resolver: DistrictResolver = Depends(get_resolver),
) -> list[EventRead]:
    """Return upcoming events located in the districts the user follows."""

    try:
        events = list_upcoming_events_for_user(
            db,
            profile=profile,
            resolver=resolver,
            days=days or get_settings().upcoming_events_days,
        )
    except MatchEvaluationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return [_event_to_schema(event) for event in events]
