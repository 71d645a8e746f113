"""Skill registry service.

The registry turns free-text skill names into stored, categorized Skill rows:
1. Normalizes every name and drops the ones that normalize to nothing
2. Deduplicates the batch by normalized name (first occurrence wins)
3. Looks each name up and, if absent, categorizes and inserts it
4. Treats an insert that loses to a concurrent writer as success

Each name is stored in its own unit of work, so a storage failure part way
through a batch leaves the names before it committed.
"""

import logging
from contextlib import AbstractContextManager
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillmatch.categorization import Categorizer
from skillmatch.domain.models import Skill
from skillmatch.logging import get_logger
from skillmatch.persistence.database import get_session
from skillmatch.persistence.exceptions import PersistenceError
from skillmatch.persistence.repositories import SkillRepository
from skillmatch.utils.text import clean_display_name, normalize_skill_name
from skillmatch.utils.timestamps import utc_now

from .exceptions import RegistryWriteError

logger = get_logger(__name__, component="registry")

SessionScope = Callable[..., AbstractContextManager]


class SkillRegistry:
    """Idempotent store of categorized skills keyed by normalized name."""

    def __init__(
        self,
        categorizer: Optional[Categorizer] = None,
        session_scope: SessionScope = get_session,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SkillRegistry.

        Args:
            categorizer: Categorizer used for new skills (defaults to the built-in lexicon)
            session_scope: Factory of transactional session contexts accepting
                immediate= (defaults to get_session)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.categorizer = categorizer or Categorizer()
        self.session_scope = session_scope
        self.logger = logger_instance or logger

    def auto_create(self, raw_names: Iterable[Optional[str]]) -> None:
        """Ensure a Skill exists for every distinct name in raw_names.

        Safe to call repeatedly and concurrently with the same names.

        Raises:
            RegistryWriteError: If storing a skill fails
        """
        self.get_or_create(raw_names)

    def get_or_create(self, raw_names: Iterable[Optional[str]]) -> List[Skill]:
        """Like auto_create, but return the stored Skill for each distinct name.

        Returns:
            Stored skills in first-seen order, one per normalized name

        Raises:
            RegistryWriteError: If storing a skill fails
        """
        entries = self._unique_entries(raw_names)
        skills = [self._store(normalized_name, display_name) for normalized_name, display_name in entries]

        self.logger.info(
            f"Registered {len(skills)} skills",
            extra={"event": "registry.batch.completed", "skill_count": len(skills)},
        )
        return skills

    def get(self, raw_name: Optional[str]) -> Optional[Skill]:
        """Look up a stored skill by any spelling that normalizes to its key."""
        normalized_name = normalize_skill_name(raw_name)
        if not normalized_name:
            return None

        with self.session_scope() as session:
            return SkillRepository(session).find_by_normalized_name(normalized_name)

    def list_by_category(self, category: str) -> List[Skill]:
        with self.session_scope() as session:
            return SkillRepository(session).list_by_category(category)

    def category_counts(self) -> Dict[str, int]:
        """Number of stored skills per category (categories with none are omitted)."""
        with self.session_scope() as session:
            return SkillRepository(session).count_by_category()

    @staticmethod
    def _unique_entries(raw_names: Iterable[Optional[str]]) -> List[Tuple[str, str]]:
        entries: Dict[str, str] = {}
        for raw_name in raw_names:
            normalized_name = normalize_skill_name(raw_name)
            if not normalized_name or normalized_name in entries:
                continue
            entries[normalized_name] = clean_display_name(raw_name)
        return list(entries.items())

    def _store(self, normalized_name: str, display_name: str) -> Skill:
        try:
            # Writer lock first: a concurrent registration commits before our lookup
            with self.session_scope(immediate=True) as session:
                return self._store_in_session(session, normalized_name, display_name)

        except (PersistenceError, SQLAlchemyError) as e:
            self.logger.error(
                f"Failed to store skill {normalized_name!r}: {e}",
                exc_info=True,
                extra={
                    "event": "registry.skill.write_failed",
                    "normalized_name": normalized_name,
                    "error_type": type(e).__name__,
                },
            )
            raise RegistryWriteError(
                f"Failed to store skill {normalized_name!r}: {e}",
                normalized_name=normalized_name,
            ) from e

    def _store_in_session(self, session: Session, normalized_name: str, display_name: str) -> Skill:
        repo = SkillRepository(session)

        existing = repo.find_by_normalized_name(normalized_name)
        if existing is not None:
            self.logger.debug(
                f"Skill {normalized_name!r} already registered",
                extra={"event": "registry.skill.exists", "normalized_name": normalized_name},
            )
            return existing

        prediction = self.categorizer.categorize(display_name)
        skill = Skill(
            normalized_name=normalized_name,
            display_name=display_name,
            category=prediction.category,
            confidence=prediction.confidence,
            reasoning=prediction.reasoning,
            created_at=utc_now(),
        )

        stored, created = repo.insert_if_absent(skill)
        if created:
            self.logger.info(
                f"Registered skill {display_name!r} as {stored.category}",
                extra={
                    "event": "registry.skill.created",
                    "normalized_name": normalized_name,
                    "category": stored.category,
                    "confidence": stored.confidence,
                },
            )
        else:
            self.logger.info(
                f"Skill {normalized_name!r} was registered concurrently, keeping stored row",
                extra={"event": "registry.skill.race_lost", "normalized_name": normalized_name},
            )
        return stored
