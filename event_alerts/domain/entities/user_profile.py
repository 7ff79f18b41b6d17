"""Domain entity representing a registered user's declared interests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from event_alerts.domain.exceptions import MatchEvaluationError


@dataclass
class UserProfile:
    """A user and the onboarding answers they provided."""

    id: str
    onboarding_answers: dict[str, Any] = field(default_factory=dict)

    def declared_districts(self) -> tuple[str, ...]:
        """Return the district names declared by the user.

        Raises :class:`MatchEvaluationError` when the stored answers do not hold
        a list of strings under ``districts``.
        """

        answers = self.onboarding_answers or {}
        if not isinstance(answers, dict):
            msg = f"Profile {self.id} has malformed onboarding answers"
            raise MatchEvaluationError(msg)
        districts = answers.get("districts")
        if districts is None:
            return ()
        if not isinstance(districts, list) or not all(
            isinstance(item, str) for item in districts
        ):
            msg = f"Profile {self.id} declares malformed districts: {districts!r}"
            raise MatchEvaluationError(msg)
        return tuple(districts)


__all__ = ["UserProfile"]
