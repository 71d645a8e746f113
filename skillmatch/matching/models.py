"""Data models for compatibility scoring and ranking."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ScoreBreakdown:
    """Explanation of a compatibility score between two users.

    Attributes:
        a_teaches_b: Normalized skills the first user teaches and the second wants to learn
        b_teaches_a: Normalized skills the second user teaches and the first wants to learn
        union_size: Number of distinct normalized skills across all four lists
        score: (len(a_teaches_b) + len(b_teaches_a)) / union_size, clipped to [0, 1]
    """

    a_teaches_b: Tuple[str, ...] = field(default_factory=tuple)
    b_teaches_a: Tuple[str, ...] = field(default_factory=tuple)
    union_size: int = 0
    score: float = 0.0

    @property
    def reciprocal_count(self) -> int:
        return len(self.a_teaches_b) + len(self.b_teaches_a)

    @property
    def is_mutual(self) -> bool:
        """True when both users have something to teach the other."""
        return bool(self.a_teaches_b) and bool(self.b_teaches_a)

    def swapped(self) -> "ScoreBreakdown":
        """The same breakdown seen from the second user's side."""
        return ScoreBreakdown(
            a_teaches_b=self.b_teaches_a,
            b_teaches_a=self.a_teaches_b,
            union_size=self.union_size,
            score=self.score,
        )


@dataclass(frozen=True)
class RankedCandidate:
    """One entry of a ranking produced for a user."""

    candidate_id: int
    score: float
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
