"""Data access layer (repositories) for persistence operations.

This module provides repository classes for the skill registry and match
records. Repositories encapsulate database operations and return domain models
rather than ORM models.

The conditional writes (insert_if_absent, insert_if_no_conflict, update_status)
run inside a SAVEPOINT so that a lost race only rolls back the attempted
statement, never the surrounding unit of work.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from skillmatch.domain.models import Match, MatchStatus, Skill, ordered_pair
from skillmatch.utils.timestamps import format_for_storage, utc_now

from .exceptions import ConflictError, PersistenceError
from .schema import MatchModel, SkillModel

logger = logging.getLogger(__name__)


def _status_values(statuses: Iterable[MatchStatus]) -> List[str]:
    return [MatchStatus(status).value for status in statuses]


class SkillRepository:
    """Repository for skill registry operations."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def find_by_normalized_name(self, normalized_name: str) -> Optional[Skill]:
        """Retrieve a skill by its natural key.

        Args:
            normalized_name: Normalized skill name

        Returns:
            Skill domain model if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            skill_model = self.session.get(SkillModel, normalized_name)
            if skill_model is None:
                return None
            return skill_model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving skill {normalized_name!r}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve skill: {e}") from e

    def insert_if_absent(self, skill: Skill) -> Tuple[Skill, bool]:
        """Insert a skill unless one with the same normalized name exists.

        A concurrent insert that lands between the caller's lookup and this
        insert is not an error: the primary key rejects the second row, the
        savepoint is rolled back and the stored row is returned.

        Args:
            skill: Skill domain model to persist

        Returns:
            Tuple of (stored Skill, created flag). created is False when an
            existing row won.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            try:
                # Core INSERT: the primary key decides, not the session's identity map
                with self.session.begin_nested():
                    self.session.execute(insert(SkillModel).values(**SkillModel.row_from_domain(skill)))
                return skill, True

            except IntegrityError:
                logger.debug(
                    f"Skill {skill.normalized_name!r} already stored, keeping existing row",
                    extra={"event": "skill.insert.conflict", "normalized_name": skill.normalized_name},
                )
                existing = self.session.get(SkillModel, skill.normalized_name, populate_existing=True)
                if existing is None:
                    raise PersistenceError(
                        f"Insert of skill {skill.normalized_name!r} conflicted but no row was found"
                    )
                return existing.to_domain(), False

        except PersistenceError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error inserting skill {skill.normalized_name!r}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert skill: {e}") from e

    def list_by_category(self, category: str) -> List[Skill]:
        """List skills of one category ordered by normalized name.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(SkillModel)
                .where(SkillModel.category == category)
                .order_by(SkillModel.normalized_name.asc())
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing skills for category {category}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list skills: {e}") from e

    def count_by_category(self) -> Dict[str, int]:
        """Count stored skills per category.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(SkillModel.category, func.count(SkillModel.normalized_name))
                .group_by(SkillModel.category)
                .order_by(SkillModel.category.asc())
            )
            return {category: count for category, count in self.session.execute(stmt).all()}

        except SQLAlchemyError as e:
            logger.error(f"Error counting skills by category: {e}", exc_info=True)
            raise PersistenceError(f"Failed to count skills: {e}") from e


class MatchRepository:
    """Repository for match records."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, match_id: int) -> Optional[Match]:
        """Retrieve a match by id, or None.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            match_model = self.session.get(MatchModel, match_id)
            if match_model is None:
                return None
            return match_model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving match {match_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve match: {e}") from e

    def find_by_pair(
        self,
        user_a: int,
        user_b: int,
        statuses: Optional[Iterable[MatchStatus]] = None,
    ) -> List[Match]:
        """Find matches between two users regardless of direction.

        Args:
            user_a: One participant
            user_b: The other participant
            statuses: Restrict to these statuses (all statuses when None)

        Returns:
            Matches ordered by id ascending

        Raises:
            PersistenceError: If database error occurs
        """
        low, high = ordered_pair(user_a, user_b)
        try:
            stmt = select(MatchModel).where(
                MatchModel.user_low_id == low,
                MatchModel.user_high_id == high,
            )
            if statuses is not None:
                stmt = stmt.where(MatchModel.status.in_(_status_values(statuses)))
            stmt = stmt.order_by(MatchModel.id.asc())

            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving matches for pair {low}/{high}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve matches: {e}") from e

    def insert_if_no_conflict(self, match: Match) -> Match:
        """Insert a match unless the pair already has an active one.

        The check is the partial unique index on the ordered pair, not a
        preceding read, so two concurrent inserts cannot both succeed.

        Args:
            match: Match domain model (id is ignored and assigned by storage)

        Returns:
            The stored Match with its id

        Raises:
            ConflictError: If an active match already exists for the pair
            PersistenceError: If database error occurs
        """
        try:
            try:
                with self.session.begin_nested():
                    match_model = MatchModel.from_domain(match.model_copy(update={"id": None}))
                    self.session.add(match_model)
                return match_model.to_domain()

            except IntegrityError as e:
                low, high = match.pair
                logger.info(
                    f"Active match already exists for pair {low}/{high}",
                    extra={"event": "match.insert.conflict", "user_low_id": low, "user_high_id": high},
                )
                raise ConflictError(f"Active match already exists for users {low} and {high}") from e

        except PersistenceError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error inserting match: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert match: {e}") from e

    def update_status(
        self,
        match_id: int,
        status: MatchStatus,
        expected_status: MatchStatus = MatchStatus.PENDING,
    ) -> Optional[Match]:
        """Conditionally move a match to a new status.

        The UPDATE only applies while the row still has expected_status, so of
        two concurrent responders exactly one wins.

        Args:
            match_id: Match to update
            status: New status
            expected_status: Status the row must currently have

        Returns:
            The updated Match, or None if no row had that id and expected status

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                update(MatchModel)
                .where(
                    MatchModel.id == match_id,
                    MatchModel.status == MatchStatus(expected_status).value,
                )
                .values(
                    status=MatchStatus(status).value,
                    updated_at=format_for_storage(utc_now()),
                )
                .execution_options(synchronize_session=False)
            )
            result = self.session.execute(stmt)
            self.session.flush()

            if result.rowcount == 0:
                return None

            match_model = self.session.get(MatchModel, match_id, populate_existing=True)
            return match_model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error updating status of match {match_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update match status: {e}") from e

    def list_for_user(
        self,
        user_id: int,
        statuses: Optional[Iterable[MatchStatus]] = None,
        incoming_only: bool = False,
    ) -> List[Match]:
        """List matches a user takes part in.

        Args:
            user_id: Participant
            statuses: Restrict to these statuses (all statuses when None)
            incoming_only: Only matches where the user is the recipient

        Returns:
            Matches ordered by created_at descending, then id descending

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            if incoming_only:
                stmt = select(MatchModel).where(MatchModel.to_user_id == user_id)
            else:
                stmt = select(MatchModel).where(
                    or_(MatchModel.from_user_id == user_id, MatchModel.to_user_id == user_id)
                )
            if statuses is not None:
                stmt = stmt.where(MatchModel.status.in_(_status_values(statuses)))
            stmt = stmt.order_by(MatchModel.created_at.desc(), MatchModel.id.desc())

            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing matches for user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list matches: {e}") from e

    def list_active_counterparts(self, user_id: int) -> Set[int]:
        """Ids of every user with a pending or accepted match with user_id.

        Single query; used by the ranker to exclude already-matched candidates.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(MatchModel.from_user_id, MatchModel.to_user_id).where(
                or_(MatchModel.from_user_id == user_id, MatchModel.to_user_id == user_id),
                MatchModel.status.in_(_status_values(MatchStatus.active())),
            )
            counterparts = set()
            for from_user_id, to_user_id in self.session.execute(stmt).all():
                counterparts.add(to_user_id if from_user_id == user_id else from_user_id)
            return counterparts

        except SQLAlchemyError as e:
            logger.error(f"Error listing active counterparts for user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list active matches: {e}") from e
