"""SQLAlchemy model for the notification ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func

from event_alerts.infrastructure.database import Base


class NotificationModel(Base):
    """One row per (user, event) pair the user has been told about."""

    __tablename__ = "notification"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_notification_user_event"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id = Column(
        String(36), ForeignKey("event.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    # The repository writes app-local wall time; the server default only covers raw inserts.
    created_at = Column(DateTime(), nullable=False, server_default=func.now())
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
