"""ASGI entry point: ``uvicorn main:app``."""

from event_alerts.main import app, create_app

__all__ = ["app", "create_app"]
