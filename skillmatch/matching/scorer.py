"""Symmetric compatibility scoring between two users.

The score rewards reciprocity: a skill counts when one user teaches it and the
other wants to learn it, in either direction. The count is divided by the size
of the union of all four skill lists, so users with long unrelated lists score
lower than users whose lists line up.
"""

from typing import Iterable, Optional, Set

from skillmatch.domain.models import UserSkills
from skillmatch.utils.text import normalize_skill_name

from .models import ScoreBreakdown


def normalized_skill_set(raw_names: Optional[Iterable[Optional[str]]]) -> Set[str]:
    """Normalize a raw skill list into a set, dropping names that normalize to nothing."""
    if not raw_names:
        return set()
    normalized = {normalize_skill_name(name) for name in raw_names}
    normalized.discard("")
    return normalized


class MatchScorer:
    """Computes compatibility scores. Stateless and safe to share."""

    def compute_score(self, user_a: UserSkills, user_b: UserSkills) -> float:
        """Compatibility score in [0, 1]; compute_score(a, b) == compute_score(b, a)."""
        return self.explain(user_a, user_b).score

    def explain(self, user_a: UserSkills, user_b: UserSkills) -> ScoreBreakdown:
        """Compute the score together with the skills behind it.

        Algorithm:
        1. Normalize the four skill lists into sets
        2. a_teaches_b = A.teach ∩ B.learn, b_teaches_a = B.teach ∩ A.learn
        3. union = A.teach ∪ A.learn ∪ B.teach ∪ B.learn
        4. score = (|a_teaches_b| + |b_teaches_a|) / |union|, 0 for an empty union

        Args:
            user_a: First user
            user_b: Second user

        Returns:
            ScoreBreakdown with sorted skill names and the score
        """
        a_teach = normalized_skill_set(user_a.skills_to_teach)
        a_learn = normalized_skill_set(user_a.skills_to_learn)
        b_teach = normalized_skill_set(user_b.skills_to_teach)
        b_learn = normalized_skill_set(user_b.skills_to_learn)

        a_teaches_b = a_teach & b_learn
        b_teaches_a = b_teach & a_learn
        union_size = len(a_teach | a_learn | b_teach | b_learn)

        if union_size == 0:
            score = 0.0
        else:
            score = (len(a_teaches_b) + len(b_teaches_a)) / union_size
            score = min(max(score, 0.0), 1.0)

        return ScoreBreakdown(
            a_teaches_b=tuple(sorted(a_teaches_b)),
            b_teaches_a=tuple(sorted(b_teaches_a)),
            union_size=union_size,
            score=score,
        )
