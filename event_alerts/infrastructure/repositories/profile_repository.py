"""Read access to user profiles."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from event_alerts.domain.entities import UserProfile
from event_alerts.infrastructure.models import ProfileModel


class UserProfileRepository:
    """Query :class:`UserProfile` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_profiles(self) -> Sequence[UserProfile]:
        query = self.session.query(ProfileModel).order_by(ProfileModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: str) -> UserProfile | None:
        model = self.session.get(ProfileModel, user_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: ProfileModel) -> UserProfile:
        answers = model.onboarding_answers
        return UserProfile(
            id=model.id,
            onboarding_answers=answers if answers is not None else {},
        )


__all__ = ["UserProfileRepository"]
