"""Public helpers for matching events to users and notifying them."""

from .batch import EventNotificationBatch, RunState, RunSummary, run_event_notifications
from .dispatch import DispatchOutcome, DispatchStatus, try_dispatch
from .geography import DistrictResolver, get_district_resolver, load_district_table
from .matching import is_eligible, select_window, window_bounds
from .messages import NOTIFICATION_TITLE, compose_message, days_until
from .upcoming import list_upcoming_events_for_user

__all__ = [
    "EventNotificationBatch",
    "RunState",
    "RunSummary",
    "run_event_notifications",
    "DispatchOutcome",
    "DispatchStatus",
    "try_dispatch",
    "DistrictResolver",
    "get_district_resolver",
    "load_district_table",
    "is_eligible",
    "select_window",
    "window_bounds",
    "NOTIFICATION_TITLE",
    "compose_message",
    "days_until",
    "list_upcoming_events_for_user",
]
