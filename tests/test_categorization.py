"""Unit tests for the lexicon, the categorizer and batch classification."""

import pytest
from pydantic import ValidationError

from skillmatch.categorization import (
    DEFAULT_LEXICON_DATA,
    BatchClassifier,
    Categorizer,
    CategoryLexicon,
    get_default_lexicon,
    load_lexicon,
)
from skillmatch.config.exceptions import ConfigurationError
from skillmatch.domain.models import OTHER_CATEGORY


class TestLexicon:
    def test_default_lexicon_is_valid(self):
        lexicon = get_default_lexicon()

        assert lexicon.version == "1.0"
        assert lexicon.acceptance_threshold == 0.2
        assert lexicon.category_names[0] == "Technology"
        assert set(lexicon.category_names) == {c.name for c in lexicon.categories}
        assert OTHER_CATEGORY not in lexicon.category_names

    def test_phrases_are_normalized(self):
        lexicon = CategoryLexicon.model_validate(
            {
                "version": "t",
                "priority": ["Technology"],
                "categories": [{"name": "Technology", "keywords": [{"phrase": "Node.JS", "weight": 1}]}],
            }
        )

        assert lexicon.get("Technology").keywords[0].phrase == "node js"

    def test_other_cannot_be_declared(self):
        with pytest.raises(ValidationError):
            CategoryLexicon.model_validate(
                {
                    "version": "t",
                    "priority": ["Other"],
                    "categories": [{"name": "Other", "keywords": [{"phrase": "x", "weight": 1}]}],
                }
            )

    def test_priority_must_cover_every_category(self):
        data = dict(DEFAULT_LEXICON_DATA, priority=DEFAULT_LEXICON_DATA["priority"][:-1])

        with pytest.raises(ValidationError, match="priority is missing"):
            CategoryLexicon.model_validate(data)

    def test_duplicate_keyword_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate keyword"):
            CategoryLexicon.model_validate(
                {
                    "version": "t",
                    "priority": ["Music"],
                    "categories": [
                        {
                            "name": "Music",
                            "keywords": [{"phrase": "Guitar", "weight": 1}, {"phrase": "guitar", "weight": 0.5}],
                        }
                    ],
                }
            )

    def test_with_threshold(self):
        lexicon = get_default_lexicon()

        assert lexicon.with_threshold(None) is lexicon
        assert lexicon.with_threshold(0.5).acceptance_threshold == 0.5
        assert lexicon.acceptance_threshold == 0.2
        with pytest.raises(ValueError):
            lexicon.with_threshold(0.0)

    def test_load_lexicon_from_yaml(self, tmp_path):
        lexicon_file = tmp_path / "lexicon.yaml"
        lexicon_file.write_text(
            """
version: "2.0"
acceptance_threshold: 0.3
priority: [Music]
categories:
  - name: Music
    saturation: 2.0
    keywords:
      - {phrase: guitar, weight: 1.0}
"""
        )

        lexicon = load_lexicon(lexicon_file)

        assert lexicon.version == "2.0"
        assert lexicon.get("Music").saturation == 2.0

    def test_load_lexicon_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_lexicon(tmp_path / "missing.yaml")

    def test_load_lexicon_invalid_content(self, tmp_path):
        lexicon_file = tmp_path / "lexicon.yaml"
        lexicon_file.write_text("version: '1'\npriority: []\ncategories: []\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_lexicon(lexicon_file)

        assert exc_info.value.errors


class TestCategorizer:
    def test_react_is_technology(self, categorizer):
        prediction = categorizer.categorize("React")

        assert prediction.category == "Technology"
        assert prediction.confidence > 0.2
        assert prediction.reasoning == "matched keywords: react"
        assert prediction.matched_keywords == ("react",)

    def test_quantum_entanglement_theory_is_other(self, categorizer):
        prediction = categorizer.categorize("Quantum Entanglement Theory")

        assert prediction.category == OTHER_CATEGORY
        assert prediction.confidence < 0.2
        assert prediction.confidence == pytest.approx(0.15)
        assert prediction.reasoning == ""
        assert prediction.is_fallback

    @pytest.mark.parametrize(
        "name,category",
        [
            ("Guitar", "Music"),
            ("Cooking", "Culinary"),
            ("node.js", "Technology"),
            ("Vegetable Gardening", "Gardening"),
            ("Yoga", "Fitness"),
            ("Spanish", "Languages"),
            ("Wedding Photography", "Photography"),
            ("Public Speaking", "Business"),
        ],
    )
    def test_known_skills(self, categorizer, name, category):
        assert categorizer.categorize(name).category == category

    def test_stem_match(self, categorizer):
        prediction = categorizer.categorize("Cooking")

        assert prediction.matched_keywords == ("cooking", "cook")
        assert prediction.confidence == 1.0

    def test_short_keywords_need_whole_tokens(self, categorizer):
        # "ai" must not match inside "painting"
        prediction = categorizer.categorize("painting")

        assert prediction.category == "Creative Arts"
        assert categorizer.score_all("painting")["Technology"] == 0.0

    def test_whole_token_beats_prefix_on_equal_score(self, categorizer):
        # Photography scores 1.0 through the "photo" prefix, Creative Arts through "photoshop"
        scores = categorizer.score_all("Photoshop")
        assert scores["Photography"] == scores["Creative Arts"] == 1.0

        prediction = categorizer.categorize("Photoshop")

        assert prediction.category == "Creative Arts"
        assert prediction.matched_keywords == ("photoshop",)

    def test_prefix_tie_overrides_priority(self):
        lexicon = CategoryLexicon.model_validate(
            {
                "version": "t",
                "priority": ["Music", "Technology"],
                "categories": [
                    {"name": "Music", "keywords": [{"phrase": "synth", "weight": 1.0}]},
                    {"name": "Technology", "keywords": [{"phrase": "synthesizer", "weight": 1.0}]},
                ],
            }
        )

        assert Categorizer(lexicon).categorize("synthesizer").category == "Technology"
        assert Categorizer(lexicon).categorize("synths").category == "Music"

    @pytest.mark.parametrize("name", ["", "   ", None, "12345", "!!!"])
    def test_empty_or_numeric_input(self, categorizer, name):
        prediction = categorizer.categorize(name)

        assert prediction.category == OTHER_CATEGORY
        assert prediction.confidence == 0.0

    def test_tie_broken_by_priority(self, tiny_lexicon):
        prediction = Categorizer(tiny_lexicon).categorize("audio")

        assert prediction.category == "Music"
        assert prediction.confidence == 0.5

    def test_tie_follows_priority_not_declaration_order(self, tiny_lexicon):
        reordered = tiny_lexicon.model_copy(update={"priority": ("Technology", "Music")})

        assert Categorizer(reordered).categorize("audio").category == "Technology"

    def test_threshold_from_lexicon(self, categorizer):
        strict = Categorizer(get_default_lexicon().with_threshold(0.7))

        assert categorizer.categorize("digital").category == "Technology"
        assert strict.categorize("digital").category == OTHER_CATEGORY

    def test_saturation_scales_confidence(self):
        lexicon = CategoryLexicon.model_validate(
            {
                "version": "t",
                "priority": ["Music"],
                "categories": [
                    {
                        "name": "Music",
                        "saturation": 2.0,
                        "keywords": [{"phrase": "guitar", "weight": 1.0}, {"phrase": "jazz", "weight": 1.0}],
                    }
                ],
            }
        )
        categorizer = Categorizer(lexicon)

        assert categorizer.categorize("guitar").confidence == 0.5
        assert categorizer.categorize("jazz guitar").confidence == 1.0

    def test_deterministic_and_case_insensitive(self, categorizer):
        first = categorizer.categorize("Machine Learning")

        assert categorizer.categorize("machine-learning") == categorizer.categorize("MACHINE LEARNING")
        assert categorizer.categorize("Machine Learning") == first

    def test_confidence_always_in_range(self, categorizer):
        for name in ["python java sql docker", "theory", "a", "Guitar Piano Drums Music"]:
            assert 0.0 <= categorizer.categorize(name).confidence <= 1.0


class TestBatchClassifier:
    def test_categorize_many_preserves_order_and_duplicates(self, categorizer):
        batch = BatchClassifier(categorizer)

        predictions = batch.categorize_many(["Guitar", "React", "Guitar"])

        assert [p.category for p in predictions] == ["Music", "Technology", "Music"]

    def test_iter_categorize_is_lazy(self, categorizer):
        batch = BatchClassifier(categorizer)

        iterator = batch.iter_categorize(iter(["React"]))

        assert next(iterator).category == "Technology"

    def test_stats_omit_empty_categories(self, categorizer):
        stats = BatchClassifier(categorizer).get_category_stats(
            ["Guitar", "Piano", "React", "Quantum Entanglement Theory"]
        )

        assert stats == {"Music": 2, "Technology": 1, OTHER_CATEGORY: 1}

    def test_stats_include_empty(self, categorizer):
        stats = BatchClassifier(categorizer).get_category_stats(["Guitar"], include_empty=True)

        assert stats["Music"] == 1
        assert stats["Wellness"] == 0
        assert stats[OTHER_CATEGORY] == 0
        assert len(stats) == len(get_default_lexicon().categories) + 1

    def test_stats_total_equals_input_length(self, categorizer):
        names = ["Guitar", "Guitar", "", "Yoga"]

        assert sum(BatchClassifier(categorizer).get_category_stats(names).values()) == len(names)
