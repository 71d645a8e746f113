"""Keyword categorizer for free-text skill names.

This module implements the classification logic that:
1. Normalizes the skill name
2. Scores every category of the lexicon independently against it
3. Picks the best category, breaking ties by the lexicon's priority order
4. Falls back to "Other" when no category clears the acceptance threshold
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from skillmatch.domain.models import OTHER_CATEGORY
from skillmatch.logging import get_logger
from skillmatch.utils.text import normalize_skill_name, tokenize

from .lexicon import CategoryDefinition, CategoryLexicon, get_default_lexicon
from .models import CategoryPrediction

logger = get_logger(__name__, component="categorization")

EXACT_HIT = "exact"
STEM_HIT = "stem"


class Categorizer:
    """Classifies skill names against a CategoryLexicon.

    The categorizer holds no mutable state; one instance can be shared by any
    number of threads. Trigger phrases are tokenized once at construction.
    """

    def __init__(
        self,
        lexicon: Optional[CategoryLexicon] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize Categorizer.

        Args:
            lexicon: Lexicon to classify against (defaults to the built-in lexicon)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.lexicon = lexicon or get_default_lexicon()
        self.logger = logger_instance or logger
        self._compiled: List[Tuple[CategoryDefinition, List[Tuple[str, float, Tuple[str, ...]]]]] = [
            (
                category,
                [(trigger.phrase, trigger.weight, trigger.tokens) for trigger in category.keywords],
            )
            for category in self.lexicon.categories
        ]

    def categorize(self, raw_name: Optional[str]) -> CategoryPrediction:
        """Classify a single skill name.

        Algorithm:
        1. Normalize the name and split it into tokens
        2. For each category, sum the weights of the triggers found in the tokens
        3. Divide by the category's saturation and clip at 1.0
        4. Take the highest score; ties go to the category with more whole-token
           weight, then to the category listed first in priority
        5. Below the acceptance threshold, return "Other" with the best score as confidence

        Never raises: empty, numeric or unknown input resolves to "Other".

        Args:
            raw_name: Skill name as entered by a user

        Returns:
            CategoryPrediction for the name
        """
        normalized = normalize_skill_name(raw_name)
        scores, matches, exact = self._score(tokenize(normalized))

        best = self._pick_winner(scores, exact)
        best_score = scores[best] if best is not None else 0.0

        if best is None or best_score < self.lexicon.acceptance_threshold:
            self.logger.debug(
                "Skill fell back to default category",
                extra={
                    "event": "categorization.fallback",
                    "normalized_name": normalized,
                    "best_candidate": best,
                    "best_score": round(best_score, 4),
                },
            )
            return CategoryPrediction(
                category=OTHER_CATEGORY,
                confidence=best_score,
                normalized_name=normalized,
            )

        matched_keywords = tuple(matches[best])
        self.logger.debug(
            "Skill categorized",
            extra={
                "event": "categorization.categorized",
                "normalized_name": normalized,
                "category": best,
                "confidence": round(best_score, 4),
            },
        )
        return CategoryPrediction(
            category=best,
            confidence=best_score,
            reasoning=format_reasoning(matched_keywords),
            matched_keywords=matched_keywords,
            normalized_name=normalized,
        )

    def score_all(self, raw_name: Optional[str]) -> Dict[str, float]:
        """Normalized score of every configured category for a name, in priority order."""
        scores, _, _ = self._score(tokenize(normalize_skill_name(raw_name)))
        return {name: scores[name] for name in self.lexicon.priority}

    def _score(
        self, tokens: Sequence[str]
    ) -> Tuple[Dict[str, float], Dict[str, List[str]], Dict[str, float]]:
        """Normalized score, matched phrases and whole-token weight per category."""
        scores: Dict[str, float] = {}
        matches: Dict[str, List[str]] = {}
        exact: Dict[str, float] = {}
        for category, triggers in self._compiled:
            raw_score = 0.0
            exact_weight = 0.0
            matched: List[str] = []
            for phrase, weight, trigger_tokens in triggers:
                hit = self._occurs(trigger_tokens, tokens)
                if hit is None:
                    continue
                raw_score += weight
                if hit == EXACT_HIT:
                    exact_weight += weight
                matched.append(phrase)
            scores[category.name] = min(raw_score / category.saturation, 1.0)
            matches[category.name] = matched
            exact[category.name] = exact_weight
        return scores, matches, exact

    def _pick_winner(self, scores: Dict[str, float], exact: Dict[str, float]) -> Optional[str]:
        """Highest score wins.

        Equal scores go to the category with more whole-token weight ("photoshop"
        beats the "photo" prefix), then to the earlier category in priority.
        """
        if not scores:
            return None
        return min(
            scores,
            key=lambda name: (-scores[name], -exact[name], self.lexicon.priority_rank(name)),
        )

    def _occurs(self, trigger_tokens: Sequence[str], tokens: Sequence[str]) -> Optional[str]:
        """Check whether a trigger occurs in the tokenized name.

        Multi-word triggers must appear as a contiguous run of whole tokens.
        Single-word triggers match a whole token, or a token prefix when the
        trigger is at least stem_min_length characters long.

        Returns:
            EXACT_HIT, STEM_HIT, or None when the trigger does not occur
        """
        width = len(trigger_tokens)
        if width == 0 or width > len(tokens):
            return None

        if width == 1:
            keyword = trigger_tokens[0]
            if keyword in tokens:
                return EXACT_HIT
            if len(keyword) >= self.lexicon.stem_min_length and any(
                token.startswith(keyword) for token in tokens
            ):
                return STEM_HIT
            return None

        target = tuple(trigger_tokens)
        for start in range(len(tokens) - width + 1):
            if tuple(tokens[start:start + width]) == target:
                return EXACT_HIT
        return None


def format_reasoning(matched_keywords: Sequence[str]) -> str:
    """Render matched keywords for display, e.g. "matched keywords: guitar, music"."""
    if not matched_keywords:
        return ""
    return f"matched keywords: {', '.join(matched_keywords)}"
