"""Shared pytest fixtures."""

import pytest

from skillmatch.categorization import CategoryLexicon, Categorizer
from skillmatch.domain.models import UserSkills
from skillmatch.logging.context import clear_log_context
from skillmatch.persistence import close_database, init_database


@pytest.fixture(autouse=True)
def clean_log_context():
    """Keep logging context from leaking between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def database():
    """Fresh in-memory database, closed after the test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()


@pytest.fixture
def file_database(tmp_path):
    """SQLite file database for tests that need several connections."""
    db_file = tmp_path / "skillmatch.db"
    init_database(f"sqlite:///{db_file}")
    yield db_file
    close_database()


@pytest.fixture
def tiny_lexicon():
    """Two categories with the same single keyword weight, for tie-break tests."""
    return CategoryLexicon.model_validate(
        {
            "version": "test",
            "acceptance_threshold": 0.2,
            "priority": ["Music", "Technology"],
            "categories": [
                {
                    "name": "Technology",
                    "keywords": [{"phrase": "audio", "weight": 0.5}, {"phrase": "python", "weight": 1.0}],
                },
                {
                    "name": "Music",
                    "keywords": [{"phrase": "audio", "weight": 0.5}, {"phrase": "guitar", "weight": 1.0}],
                },
            ],
        }
    )


@pytest.fixture
def categorizer():
    return Categorizer()


@pytest.fixture
def guitar_user():
    return UserSkills(id=1, skills_to_teach=["Guitar"], skills_to_learn=["Cooking"])


@pytest.fixture
def cooking_user():
    return UserSkills(id=2, skills_to_teach=["Cooking"], skills_to_learn=["Guitar"])
