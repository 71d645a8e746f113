"""Unit tests for the skill registry."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from skillmatch.domain.models import OTHER_CATEGORY, Skill
from skillmatch.persistence import PersistenceError, SkillRepository, get_session
from skillmatch.registry import RegistryWriteError, SkillRegistry

STORED_REACT = Skill(
    normalized_name="react",
    display_name="React",
    category="Technology",
    confidence=1.0,
    reasoning="matched keywords: react",
    created_at=datetime(2026, 1, 5, tzinfo=timezone.utc),
)


@pytest.fixture
def registry(database, categorizer):
    return SkillRegistry(categorizer)


class TestAutoCreate:
    def test_spellings_of_one_skill_store_one_row(self, registry):
        registry.auto_create(["React", "react", " React "])

        assert registry.category_counts() == {"Technology": 1}
        skill = registry.get("REACT")
        assert skill.display_name == "React"
        assert skill.normalized_name == "react"
        assert skill.category == "Technology"
        assert skill.reasoning == "matched keywords: react"

    def test_idempotent_across_calls(self, registry):
        registry.auto_create(["Guitar", "Cooking"])
        first = registry.get("guitar")

        registry.auto_create(["guitar", "GUITAR", "Cooking"])

        assert registry.get("guitar") == first
        assert sum(registry.category_counts().values()) == 2

    def test_display_name_never_changes(self, registry):
        registry.auto_create(["  Web   Development "])
        registry.auto_create(["WEB DEVELOPMENT"])

        assert registry.get("web development").display_name == "Web Development"

    def test_empty_names_are_dropped(self, registry):
        registry.auto_create(["", "   ", None, "!!!"])

        assert registry.category_counts() == {}

    def test_uncategorized_skill_goes_to_other(self, registry):
        registry.auto_create(["Quantum Entanglement Theory"])

        skill = registry.get("quantum entanglement theory")
        assert skill.category == OTHER_CATEGORY
        assert skill.reasoning == ""

    def test_concurrent_insert_is_success(self, registry):
        with get_session() as session:
            SkillRepository(session).insert_if_absent(STORED_REACT)

        # Simulate losing the race: the lookup misses, the insert hits the primary key
        with patch.object(SkillRepository, "find_by_normalized_name", autospec=True, return_value=None):
            skills = registry.get_or_create(["REACT"])

        assert [skill.display_name for skill in skills] == ["React"]
        assert registry.category_counts() == {"Technology": 1}

    def test_write_failure_raises_retryable_error_and_keeps_earlier_items(self, registry):
        original = SkillRepository.insert_if_absent

        def flaky(repo, skill):
            if skill.normalized_name == "guitar":
                raise PersistenceError("disk I/O error")
            return original(repo, skill)

        with patch.object(SkillRepository, "insert_if_absent", autospec=True, side_effect=flaky):
            with pytest.raises(RegistryWriteError) as exc_info:
                registry.auto_create(["React", "Guitar", "Yoga"])

        error = exc_info.value
        assert error.retryable is True
        assert error.normalized_name == "guitar"
        assert isinstance(error.__cause__, PersistenceError)

        assert registry.get("react") is not None
        assert registry.get("guitar") is None
        assert registry.get("yoga") is None

        # Retrying resumes where it stopped
        registry.auto_create(["React", "Guitar", "Yoga"])
        assert registry.category_counts() == {"Fitness": 1, "Music": 1, "Technology": 1}


class TestReadHelpers:
    def test_get_or_create_returns_first_seen_order(self, registry):
        skills = registry.get_or_create(["Yoga", "guitar", "YOGA", "React"])

        assert [skill.normalized_name for skill in skills] == ["yoga", "guitar", "react"]

    def test_get_unknown_or_empty(self, registry):
        assert registry.get("never stored") is None
        assert registry.get("") is None

    def test_list_by_category(self, registry):
        registry.auto_create(["Vue", "React", "Guitar"])

        names = [skill.display_name for skill in registry.list_by_category("Technology")]

        assert names == ["React", "Vue"]


class TestWriteTransactions:
    def test_writes_open_a_writer_transaction(self, categorizer):
        session_scope = MagicMock()

        with patch("skillmatch.registry.service.SkillRepository") as repo_cls:
            repo_cls.return_value.find_by_normalized_name.return_value = STORED_REACT
            SkillRegistry(categorizer, session_scope=session_scope).auto_create(["React"])

        session_scope.assert_called_once_with(immediate=True)
