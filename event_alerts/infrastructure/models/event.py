"""SQLAlchemy model for catalog events."""

from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, String, Text, func

from event_alerts.infrastructure.database import Base


class EventModel(Base):
    """Database representation of a scheduled catalog event."""

    __tablename__ = "event"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    event_type = Column(String(100), nullable=True)
    location = Column(String(255), nullable=False, default="")
    municipality = Column(String(120), nullable=True)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=True, index=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["EventModel"]
