"""Errors raised by the event notification engine."""


class NotificationEngineError(RuntimeError):
    """Base class for notification engine failures."""


class SourceUnavailableError(NotificationEngineError):
    """The event or user store could not be read; the run is aborted."""


class MatchEvaluationError(NotificationEngineError):
    """An event or profile record is malformed; only that pair is skipped."""


class SinkDeliveryError(NotificationEngineError):
    """The notification sink rejected or failed to deliver a message."""


__all__ = [
    "NotificationEngineError",
    "SourceUnavailableError",
    "MatchEvaluationError",
    "SinkDeliveryError",
]
