"""Database schema definition and ORM models.

This module defines SQLAlchemy ORM models for the skill registry and the match
table, and the conversions between ORM models and domain models.

Uniqueness guarantees the engine relies on:
- skills.normalized_name is the primary key: one row per normalized name.
- uq_matches_active_pair: a partial unique index over the ordered participant
  pair, restricted to pending/accepted rows. Any number of rejected rows may
  exist for a pair, but at most one active one.
"""

import logging

from sqlalchemy import Column, Float, Index, Integer, String, Text, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from skillmatch.domain.models import Match, MatchStatus, Skill
from skillmatch.utils.timestamps import format_for_storage, parse_from_storage

logger = logging.getLogger(__name__)

Base = declarative_base()

_ACTIVE_STATUS_CLAUSE = text(
    "status IN ('{}', '{}')".format(MatchStatus.PENDING.value, MatchStatus.ACCEPTED.value)
)


class SkillModel(Base):
    """ORM model for skills table."""

    __tablename__ = "skills"

    normalized_name = Column(String(255), primary_key=True, nullable=False)
    display_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    confidence = Column(Float, nullable=False)
    reasoning = Column(Text, nullable=False, default="")

    # Timestamps stored as ISO 8601 strings
    created_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_skills_category", "category"),)

    def to_domain(self) -> Skill:
        return Skill(
            normalized_name=self.normalized_name,
            display_name=self.display_name,
            category=self.category,
            confidence=self.confidence,
            reasoning=self.reasoning or "",
            created_at=parse_from_storage(self.created_at),
        )

    @staticmethod
    def row_from_domain(skill: Skill) -> dict:
        """Column values for a Core INSERT."""
        return {
            "normalized_name": skill.normalized_name,
            "display_name": skill.display_name,
            "category": skill.category,
            "confidence": skill.confidence,
            "reasoning": skill.reasoning,
            "created_at": format_for_storage(skill.created_at),
        }

    @classmethod
    def from_domain(cls, skill: Skill) -> "SkillModel":
        return cls(**cls.row_from_domain(skill))


class MatchModel(Base):
    """ORM model for matches table.

    user_low_id/user_high_id hold the participant pair in canonical order so
    that (A, B) and (B, A) hit the same unique index entry.
    """

    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, autoincrement=True)

    from_user_id = Column(Integer, nullable=False)
    to_user_id = Column(Integer, nullable=False)
    user_low_id = Column(Integer, nullable=False)
    user_high_id = Column(Integer, nullable=False)

    status = Column(String(16), nullable=False)
    score = Column(Float, nullable=False)

    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (
        Index(
            "uq_matches_active_pair",
            "user_low_id",
            "user_high_id",
            unique=True,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
        ),
        Index("idx_matches_to_user_status", "to_user_id", "status"),
        Index("idx_matches_from_user_status", "from_user_id", "status"),
    )

    def to_domain(self) -> Match:
        return Match(
            id=self.id,
            from_user_id=self.from_user_id,
            to_user_id=self.to_user_id,
            status=MatchStatus(self.status),
            score=self.score,
            created_at=parse_from_storage(self.created_at),
            updated_at=parse_from_storage(self.updated_at),
        )

    @classmethod
    def from_domain(cls, match: Match) -> "MatchModel":
        low, high = match.pair
        return cls(
            id=match.id,
            from_user_id=match.from_user_id,
            to_user_id=match.to_user_id,
            user_low_id=low,
            user_high_id=high,
            status=MatchStatus(match.status).value,
            score=match.score,
            created_at=format_for_storage(match.created_at),
            updated_at=format_for_storage(match.updated_at),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)

        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")

    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
