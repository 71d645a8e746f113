"""Match lifecycle: proposing matches and answering them.

State machine:

    pending --accept--> accepted
    pending --reject--> rejected

accepted and rejected are terminal. For any pair of users at most one match is
pending or accepted at a time; a rejected match does not block a new proposal.
Both rules are enforced by storage (partial unique index, conditional UPDATE)
rather than by reading first and writing afterwards.
"""

import logging
import math
from typing import List, Optional, Union

from skillmatch.domain.models import Match, MatchDecision, MatchStatus
from skillmatch.logging import get_logger
from skillmatch.persistence.database import get_session
from skillmatch.persistence.exceptions import ConflictError
from skillmatch.persistence.repositories import MatchRepository
from skillmatch.utils.timestamps import utc_now

from .exceptions import (
    DuplicateMatchError,
    InvalidStateTransition,
    MatchNotFoundError,
    SelfMatchError,
    UnauthorizedTransition,
)

logger = get_logger(__name__, component="matching")


class MatchLifecycle:
    """Creates matches and applies the recipient's decision to them."""

    def __init__(self, session_scope=get_session, logger_instance: Optional[logging.Logger] = None):
        """Initialize MatchLifecycle.

        Args:
            session_scope: Factory of transactional session contexts accepting
                immediate= (defaults to get_session)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.session_scope = session_scope
        self.logger = logger_instance or logger

    def create(self, from_user_id: int, to_user_id: int, score: float) -> Match:
        """Propose a match from one user to another.

        Args:
            from_user_id: Proposing user
            to_user_id: Recipient, the only user who may respond
            score: Compatibility score at proposal time, in [0, 1]

        Returns:
            The stored pending Match

        Raises:
            SelfMatchError: If both ids are the same user
            ValueError: If score is not a number within [0, 1]
            DuplicateMatchError: If the pair already has a pending or accepted match
            PersistenceError: If storage fails for another reason
        """
        if from_user_id == to_user_id:
            raise SelfMatchError(from_user_id)
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError(f"Match score must be a number, got {score!r}")
        if math.isnan(score) or not 0.0 <= score <= 1.0:
            raise ValueError(f"Match score must be within [0, 1], got {score}")

        now = utc_now()
        match = Match(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=MatchStatus.PENDING,
            score=score,
            created_at=now,
            updated_at=now,
        )

        try:
            with self.session_scope(immediate=True) as session:
                stored = MatchRepository(session).insert_if_no_conflict(match)

        except ConflictError as e:
            existing = self._find_active(from_user_id, to_user_id)
            self.logger.info(
                f"Rejected duplicate match proposal {from_user_id} -> {to_user_id}",
                extra={
                    "event": "match.duplicate",
                    "from_user_id": from_user_id,
                    "to_user_id": to_user_id,
                    "existing_match_id": existing.id if existing else None,
                },
            )
            raise DuplicateMatchError(existing=existing) from e

        self.logger.info(
            f"Created match {stored.id}: {from_user_id} -> {to_user_id}",
            extra={
                "event": "match.created",
                "match_id": stored.id,
                "from_user_id": from_user_id,
                "to_user_id": to_user_id,
                "score": score,
            },
        )
        return stored

    def respond(
        self, match_id: int, by_user_id: int, decision: Union[MatchDecision, str]
    ) -> Match:
        """Accept or reject a pending match as its recipient.

        Checks run in this order: the match exists, the responder is the
        recipient, the match is still pending.

        Args:
            match_id: Match to answer
            by_user_id: Responding user
            decision: MatchDecision (or its string value)

        Returns:
            The updated Match

        Raises:
            ValueError: If decision is not a valid MatchDecision
            MatchNotFoundError: If match_id does not exist
            UnauthorizedTransition: If by_user_id is not the recipient
            InvalidStateTransition: If the match is not pending, including when a
                concurrent response got there first
        """
        decision = MatchDecision(decision)

        # The read below must see any response committed before ours
        with self.session_scope(immediate=True) as session:
            repo = MatchRepository(session)

            match = repo.get_by_id(match_id)
            if match is None:
                raise MatchNotFoundError(match_id)
            if by_user_id != match.to_user_id:
                raise UnauthorizedTransition(match_id, by_user_id)
            if match.status is not MatchStatus.PENDING:
                raise InvalidStateTransition(match_id, match.status.value)

            updated = repo.update_status(
                match_id, decision.resulting_status, expected_status=MatchStatus.PENDING
            )
            if updated is None:
                current = repo.get_by_id(match_id)
                current_status = current.status.value if current else "missing"
                raise InvalidStateTransition(match_id, current_status)

        self.logger.info(
            f"Match {match_id} {updated.status.value} by user {by_user_id}",
            extra={
                "event": "match.responded",
                "match_id": match_id,
                "user_id": by_user_id,
                "status": updated.status.value,
            },
        )
        return updated

    def get(self, match_id: int) -> Optional[Match]:
        with self.session_scope() as session:
            return MatchRepository(session).get_by_id(match_id)

    def pending_for(self, user_id: int) -> List[Match]:
        """Pending matches waiting for this user's answer, newest first."""
        with self.session_scope() as session:
            return MatchRepository(session).list_for_user(
                user_id, statuses=[MatchStatus.PENDING], incoming_only=True
            )

    def accepted_for(self, user_id: int) -> List[Match]:
        """Accepted matches with the user on either side, newest first."""
        with self.session_scope() as session:
            return MatchRepository(session).list_for_user(user_id, statuses=[MatchStatus.ACCEPTED])

    def _find_active(self, user_a: int, user_b: int) -> Optional[Match]:
        with self.session_scope() as session:
            active = MatchRepository(session).find_by_pair(user_a, user_b, MatchStatus.active())
        return active[0] if active else None
