"""Notification delivery helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .sink import (
    NotificationSink,
    RealtimeNotificationSink,
    realtime_sink,
    serialize_notification,
)

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationSink",
    "RealtimeNotificationSink",
    "realtime_sink",
    "serialize_notification",
]
