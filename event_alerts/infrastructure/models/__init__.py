"""ORM models used by the application infrastructure."""

from .event import EventModel
from .profile import ProfileModel
from .notification import NotificationModel

__all__ = [
    "EventModel",
    "ProfileModel",
    "NotificationModel",
]
