"""Data models for categorization results."""

from dataclasses import dataclass, field
from typing import Tuple

from skillmatch.domain.models import OTHER_CATEGORY


@dataclass(frozen=True)
class CategoryPrediction:
    """Result of classifying a single skill name.

    Attributes:
        category: Winning category, or "Other" when nothing cleared the threshold
        confidence: Normalized score of the winning category in [0, 1]; for "Other"
            it is the best score observed, which is below the threshold
        reasoning: Human-readable list of the keywords behind the category
            (empty for "Other")
        matched_keywords: The same keywords as a tuple, in lexicon order
        normalized_name: The normalized input the prediction was computed from
    """

    category: str
    confidence: float
    reasoning: str = ""
    matched_keywords: Tuple[str, ...] = field(default_factory=tuple)
    normalized_name: str = ""

    @property
    def is_fallback(self) -> bool:
        """True when the skill fell through to the "Other" category."""
        return self.category == OTHER_CATEGORY
