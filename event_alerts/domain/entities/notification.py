"""Domain entity representing a notification ledger entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Record of a message created for a user about a specific event.

    At most one entry exists for each ``(user_id, event_id)`` pair.
    """

    id: int | None
    user_id: str
    event_id: str
    title: str
    message: str
    created_at: datetime | None = None
    read_at: datetime | None = None


__all__ = ["Notification"]
