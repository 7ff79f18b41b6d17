"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from event_alerts.application.use_cases.notifications import (
    DistrictResolver,
    get_district_resolver,
)
from event_alerts.domain.entities import UserProfile
from event_alerts.infrastructure.database import get_db
from event_alerts.infrastructure.notifications import NotificationSink, realtime_sink
from event_alerts.infrastructure.repositories import UserProfileRepository


def get_notification_sink() -> NotificationSink:
    """Return the sink used to deliver newly recorded notifications."""

    return realtime_sink


def get_resolver() -> DistrictResolver:
    return get_district_resolver()


def get_profile_or_404(user_id: str, db: Session = Depends(get_db)) -> UserProfile:
    """Return the profile identified by ``user_id`` or fail with 404."""

    profile = UserProfileRepository(db).get(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    return profile
