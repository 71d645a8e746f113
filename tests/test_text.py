"""Unit tests for skill name normalization."""

import pytest

from skillmatch.utils.text import clean_display_name, normalize_skill_name, tokenize


class TestNormalizeSkillName:
    """Tests for normalize_skill_name."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("React", "react"),
            (" React ", "react"),
            ("REACT", "react"),
            ("Node.js", "node js"),
            ("  Web   Development! ", "web development"),
            ("C++", "c"),
            ("snake_case", "snake case"),
            ("Straße", "strasse"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_skill_name(raw) == expected

    def test_none_and_empty(self):
        assert normalize_skill_name(None) == ""
        assert normalize_skill_name("") == ""
        assert normalize_skill_name("   ") == ""
        assert normalize_skill_name("!!!") == ""

    def test_idempotent(self):
        once = normalize_skill_name("  Machine-Learning & AI ")
        assert normalize_skill_name(once) == once

    def test_digits_are_kept(self):
        assert normalize_skill_name("Python 3") == "python 3"


class TestCleanDisplayName:
    def test_keeps_casing_and_punctuation(self):
        assert clean_display_name("  Node.js   Basics ") == "Node.js Basics"

    def test_none(self):
        assert clean_display_name(None) == ""


class TestTokenize:
    def test_splits_on_spaces(self):
        assert tokenize("web development") == ["web", "development"]

    def test_empty(self):
        assert tokenize("") == []
