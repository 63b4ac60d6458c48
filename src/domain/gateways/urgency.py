"""Urgency scorer protocol."""

from typing import Protocol

from domain.entities.urgency import UrgencyAssessment


class IUrgencyScorer(Protocol):
    """Scores complaint text for resolution priority."""

    async def score(self, description: str) -> UrgencyAssessment:
        """
        Score a complaint description.

        Implementations never raise: any failure yields a fallback assessment.

        Args:
            description: The reporter's free text, unmodified

        Returns:
            UrgencyAssessment with a score in [0, 1] and its origin
        """
        ...
