"""SQLAlchemy model for user profiles."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, String, func

from event_alerts.infrastructure.database import Base


class ProfileModel(Base):
    """Database representation of a registered user and their preferences."""

    __tablename__ = "profile"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    full_name = Column(String(120), nullable=True)
    onboarding_answers = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ProfileModel"]
