"""Read access to catalog events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from event_alerts.domain.entities import Event
from event_alerts.infrastructure.models import EventModel


class EventRepository:
    """Query :class:`Event` objects from the catalog tables."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_between(self, start: date, end: date) -> Sequence[Event]:
        """Return dated events with ``start <= event_date <= end``, earliest first."""

        query = (
            self.session.query(EventModel)
            .filter(EventModel.event_date.is_not(None))
            .filter(EventModel.event_date >= start)
            .filter(EventModel.event_date <= end)
            .order_by(EventModel.event_date.asc(), EventModel.name.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, event_id: str) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            name=model.name,
            event_date=model.event_date,
            location=model.location or "",
            municipality=model.municipality,
            description=model.description,
            event_type=model.event_type,
            image_url=model.image_url,
        )


__all__ = ["EventRepository"]
