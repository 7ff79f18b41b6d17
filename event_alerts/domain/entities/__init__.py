"""Domain entities exposed by the application."""

from .event import Event
from .notification import Notification
from .user_profile import UserProfile

__all__ = [
    "Event",
    "Notification",
    "UserProfile",
]
