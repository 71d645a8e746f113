"""Batch classification and category statistics.

This is a reporting utility: input order is preserved and duplicates are
classified (and counted) as many times as they appear. Deduplication is the
registry's job, not this one's.
"""

from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional

from skillmatch.domain.models import OTHER_CATEGORY

from .engine import Categorizer
from .models import CategoryPrediction


class BatchClassifier:
    """Applies a Categorizer over sequences of skill names."""

    def __init__(self, categorizer: Optional[Categorizer] = None):
        self.categorizer = categorizer or Categorizer()

    def iter_categorize(self, names: Iterable[Optional[str]]) -> Iterator[CategoryPrediction]:
        """Lazily classify names one by one, in input order."""
        for name in names:
            yield self.categorizer.categorize(name)

    def categorize_many(self, names: Iterable[Optional[str]]) -> List[CategoryPrediction]:
        """Classify every name; the result is index-aligned with the input."""
        return list(self.iter_categorize(names))

    def get_category_stats(
        self, names: Iterable[Optional[str]], include_empty: bool = False
    ) -> Dict[str, int]:
        """Count how many names fall into each category.

        Args:
            names: Skill names to classify
            include_empty: Also report configured categories (and "Other") with zero names

        Returns:
            Mapping of category name to count. Without include_empty, only
            categories that occur in the input are present.
        """
        counts = Counter(prediction.category for prediction in self.iter_categorize(names))

        if not include_empty:
            return dict(counts)

        stats = {name: counts.get(name, 0) for name in self.categorizer.lexicon.category_names}
        stats[OTHER_CATEGORY] = counts.get(OTHER_CATEGORY, 0)
        return stats
