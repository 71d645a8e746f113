"""Compatibility scoring, candidate ranking and the match lifecycle.

This module provides:
- MatchScorer: symmetric reciprocal-skill score between two users
- MatchRanker: ranked, deduplicated candidate list for one user
- MatchLifecycle: create and answer match proposals
- ScoreBreakdown / RankedCandidate: scoring and ranking results
- MatchError and its subclasses: lifecycle failures
"""

from .exceptions import (
    DUPLICATE_MATCH_MESSAGE,
    DuplicateMatchError,
    InvalidStateTransition,
    MatchError,
    MatchNotFoundError,
    SelfMatchError,
    UnauthorizedTransition,
)
from .lifecycle import MatchLifecycle
from .models import RankedCandidate, ScoreBreakdown
from .ranker import MatchRanker
from .scorer import MatchScorer, normalized_skill_set

__all__ = [
    "MatchScorer",
    "MatchRanker",
    "MatchLifecycle",
    "ScoreBreakdown",
    "RankedCandidate",
    "normalized_skill_set",
    "MatchError",
    "DuplicateMatchError",
    "InvalidStateTransition",
    "UnauthorizedTransition",
    "SelfMatchError",
    "MatchNotFoundError",
    "DUPLICATE_MATCH_MESSAGE",
]
