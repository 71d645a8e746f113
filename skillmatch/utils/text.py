"""Text normalization for skill names.

normalize_skill_name() is the single definition of a skill's natural key. The
categorizer, the registry and the match scorer all go through it so that casing,
punctuation and whitespace drift can never produce two different keys for the
same skill.
"""

import re
from typing import List, Optional

_NON_WORD = re.compile(r"[^\w\s]|_", re.UNICODE)
_WHITESPACE = re.compile(r"\s+")


def normalize_skill_name(raw: Optional[str]) -> str:
    """Normalize a free-text skill name.

    Normalization steps:
    - Unicode case-fold
    - Replace punctuation (anything that is not a letter, digit or whitespace) with a space
    - Collapse whitespace runs to a single space
    - Trim

    Args:
        raw: Raw skill name as entered by a user (None is treated as empty)

    Returns:
        Normalized name (empty string if nothing meaningful remains)

    Example:
        >>> normalize_skill_name("  Node.js   Development! ")
        'node js development'
    """
    if not raw:
        return ""

    normalized = raw.casefold()
    normalized = _NON_WORD.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized)

    return normalized.strip()


def clean_display_name(raw: Optional[str]) -> str:
    """Trim a raw name and collapse internal whitespace, keeping casing and punctuation.

    Example:
        >>> clean_display_name("  Digital   Marketing ")
        'Digital Marketing'
    """
    if not raw:
        return ""
    return _WHITESPACE.sub(" ", raw).strip()


def tokenize(normalized: str) -> List[str]:
    """Split an already-normalized name into tokens."""
    if not normalized:
        return []
    return normalized.split(" ")
