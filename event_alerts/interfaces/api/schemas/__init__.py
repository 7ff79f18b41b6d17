"""Schemas exposed by the HTTP API."""

from .event import DistrictRead, EventRead
from .notification import (
    EventRunSummary,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

__all__ = [
    "DistrictRead",
    "EventRead",
    "EventRunSummary",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
]
