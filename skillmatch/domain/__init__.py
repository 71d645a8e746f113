"""Domain models for the skill matching engine."""

from .models import (
    OTHER_CATEGORY,
    Match,
    MatchDecision,
    MatchStatus,
    Skill,
    UserSkills,
    ordered_pair,
)

__all__ = [
    "Skill",
    "UserSkills",
    "Match",
    "MatchStatus",
    "MatchDecision",
    "OTHER_CATEGORY",
    "ordered_pair",
]
