"""Core domain models for skills, users and matches.

This module defines the data structures used throughout the engine:
- Skill: a categorized registry entry keyed by its normalized name
- UserSkills: the subset of a user account the matching engine reads
- Match: a match proposal between two users and its lifecycle status
- MatchStatus / MatchDecision: the states and the recipient's possible answers
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

OTHER_CATEGORY = "Other"


def _to_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is None:
        return None
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class MatchStatus(str, Enum):
    """Lifecycle states of a Match. PENDING is initial, the others are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchStatus.PENDING

    @classmethod
    def active(cls) -> Tuple["MatchStatus", ...]:
        """Statuses that block a new proposal for the same pair."""
        return (cls.PENDING, cls.ACCEPTED)


class MatchDecision(str, Enum):
    """Answer the recipient of a match proposal can give."""

    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def resulting_status(self) -> MatchStatus:
        if self is MatchDecision.ACCEPT:
            return MatchStatus.ACCEPTED
        return MatchStatus.REJECTED


class Skill(BaseModel):
    """Categorized skill registry entry.

    normalized_name is the natural key: at most one Skill exists per normalized
    name. display_name keeps the casing of the first successful insertion.
    """

    normalized_name: str = Field(..., min_length=1, description="Case-folded, punctuation-free key")
    display_name: str = Field(..., min_length=1, description="Name as first submitted")
    category: str = Field(..., min_length=1, description="Assigned category or 'Other'")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Classification confidence")
    reasoning: str = Field("", description="Keywords that produced the category")
    created_at: datetime = Field(..., description="When the skill was registered (UTC)")

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware and in UTC."""
        return _to_utc(v)

    model_config = {"json_schema_extra": {"example": {
        "normalized_name": "react",
        "display_name": "React",
        "category": "Technology",
        "confidence": 1.0,
        "reasoning": "matched keywords: react",
        "created_at": "2026-01-05T10:00:00Z",
    }}}


class UserSkills(BaseModel):
    """The part of a user account the matching engine reads.

    Skill lists hold raw, user-entered strings; normalization happens in the
    scorer. Missing lists (None) are treated as empty.
    """

    id: int = Field(..., description="User identifier")
    skills_to_teach: List[str] = Field(default_factory=list)
    skills_to_learn: List[str] = Field(default_factory=list)

    @field_validator("skills_to_teach", "skills_to_learn", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        if v is None:
            return []
        return v


class Match(BaseModel):
    """A match proposal from one user to another."""

    id: Optional[int] = Field(None, description="Storage-assigned identifier")
    from_user_id: int = Field(..., description="User who proposed the match")
    to_user_id: int = Field(..., description="Recipient, the only user allowed to respond")
    status: MatchStatus = Field(MatchStatus.PENDING)
    score: float = Field(..., ge=0.0, le=1.0, description="Compatibility score at proposal time")
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware and in UTC."""
        return _to_utc(v)

    @model_validator(mode="after")
    def validate_participants(self):
        if self.from_user_id == self.to_user_id:
            raise ValueError("A match needs two different users")
        return self

    @property
    def pair(self) -> Tuple[int, int]:
        """The unordered participant pair as an ordered (low, high) tuple."""
        return ordered_pair(self.from_user_id, self.to_user_id)

    def counterpart_of(self, user_id: int) -> int:
        """Return the other participant.

        Raises:
            ValueError: If user_id does not take part in this match
        """
        if user_id == self.from_user_id:
            return self.to_user_id
        if user_id == self.to_user_id:
            return self.from_user_id
        raise ValueError(f"User {user_id} is not part of match {self.id}")


def ordered_pair(user_a: int, user_b: int) -> Tuple[int, int]:
    """Canonical form of an unordered user pair."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)
