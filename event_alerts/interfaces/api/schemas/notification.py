"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResponse(BaseModel):
    updated: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: str
    event_id: str
    title: str
    message: str
    created_at: datetime
    read_at: datetime | None = None


class EventRunSummary(BaseModel):
    """Result of a notification batch run."""

    success: bool = True
    events_considered: int
    users_considered: int
    pairs_evaluated: int
    notifications_created: int
    already_notified: int
    failed: int
    duration_ms: int
    stopped_early: bool = False


__all__ = [
    "EventRunSummary",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
]
