"""Candidate ranking for one user.

Ranking steps:
1. Drop the user themself and repeated candidate ids (first occurrence wins)
2. Drop candidates that already have a pending or accepted match with the user
3. Score the rest and drop zero scores
4. Sort by score descending, then candidate id ascending
"""

import logging
from typing import Iterable, List, Optional, Set

from skillmatch.domain.models import UserSkills
from skillmatch.logging import get_logger
from skillmatch.persistence.database import get_session
from skillmatch.persistence.repositories import MatchRepository

from .models import RankedCandidate
from .scorer import MatchScorer

logger = get_logger(__name__, component="ranking")


class MatchRanker:
    """Ranks a candidate pool by compatibility with one user."""

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        session_scope=get_session,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize MatchRanker.

        Args:
            scorer: Scorer used for every candidate (defaults to MatchScorer())
            session_scope: Factory of transactional session contexts (defaults to get_session)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.scorer = scorer or MatchScorer()
        self.session_scope = session_scope
        self.logger = logger_instance or logger

    def rank(self, for_user: UserSkills, candidate_pool: Iterable[UserSkills]) -> List[RankedCandidate]:
        """Rank candidates for for_user.

        The returned list is not truncated; callers apply their own limit.

        Args:
            for_user: User the ranking is computed for
            candidate_pool: Users to consider, possibly including for_user and repeats

        Returns:
            Ranked candidates with a score above zero

        Raises:
            PersistenceError: If reading the user's active matches fails
        """
        excluded = self._active_counterparts(for_user.id)
        seen: Set[int] = {for_user.id}
        ranked: List[RankedCandidate] = []
        considered = 0

        for candidate in candidate_pool:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            considered += 1

            if candidate.id in excluded:
                continue

            breakdown = self.scorer.explain(for_user, candidate)
            if breakdown.score <= 0.0:
                continue

            ranked.append(
                RankedCandidate(candidate_id=candidate.id, score=breakdown.score, breakdown=breakdown)
            )

        ranked.sort(key=lambda entry: (-entry.score, entry.candidate_id))

        self.logger.info(
            f"Ranked {len(ranked)} of {considered} candidates for user {for_user.id}",
            extra={
                "event": "ranking.completed",
                "user_id": for_user.id,
                "candidates_considered": considered,
                "candidates_excluded": len(excluded),
                "candidates_ranked": len(ranked),
            },
        )
        return ranked

    def _active_counterparts(self, user_id: int) -> Set[int]:
        with self.session_scope() as session:
            return MatchRepository(session).list_active_counterparts(user_id)
