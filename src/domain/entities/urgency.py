"""Urgency assessment value object."""

from dataclasses import dataclass
from enum import StrEnum


class ScoreOrigin(StrEnum):
    """Where an urgency score came from."""

    ASSESSED = "assessed"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class UrgencyAssessment:
    """An urgency score in [0, 1] and whether the scoring service produced it."""

    score: float
    origin: ScoreOrigin = ScoreOrigin.ASSESSED

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Urgency score must be within [0, 1], got {self.score}")

    @property
    def is_fallback(self) -> bool:
        return self.origin == ScoreOrigin.FALLBACK

    @classmethod
    def fallback(cls, score: float = 0.5) -> "UrgencyAssessment":
        """Neutral score used when the scoring service could not be used."""
        return cls(score=score, origin=ScoreOrigin.FALLBACK)
