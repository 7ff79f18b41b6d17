"""Repository implementations for infrastructure layer."""

from .event_repository import EventRepository
from .profile_repository import UserProfileRepository
from .notification_repository import NotificationRepository

__all__ = [
    "EventRepository",
    "UserProfileRepository",
    "NotificationRepository",
]
