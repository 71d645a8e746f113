"""Unit tests for domain models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from skillmatch.domain.models import (
    Match,
    MatchDecision,
    MatchStatus,
    Skill,
    UserSkills,
    ordered_pair,
)

NOW = datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


def _match(**overrides):
    data = dict(from_user_id=1, to_user_id=2, score=0.5, created_at=NOW, updated_at=NOW)
    data.update(overrides)
    return Match(**data)


class TestSkill:
    def test_valid_skill(self):
        skill = Skill(
            normalized_name="react",
            display_name="React",
            category="Technology",
            confidence=1.0,
            reasoning="matched keywords: react",
            created_at=NOW,
        )

        assert skill.normalized_name == "react"
        assert skill.reasoning == "matched keywords: react"

    def test_naive_created_at_becomes_utc(self):
        skill = Skill(
            normalized_name="react",
            display_name="React",
            category="Technology",
            confidence=1.0,
            created_at=datetime(2026, 1, 5, 12, 0, 0),
        )

        assert skill.created_at.tzinfo == timezone.utc

    @pytest.mark.parametrize("confidence", [-0.1, 1.1])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValidationError):
            Skill(
                normalized_name="react",
                display_name="React",
                category="Technology",
                confidence=confidence,
                created_at=NOW,
            )


class TestUserSkills:
    def test_none_lists_become_empty(self):
        user = UserSkills(id=1, skills_to_teach=None, skills_to_learn=None)

        assert user.skills_to_teach == []
        assert user.skills_to_learn == []

    def test_defaults(self):
        assert UserSkills(id=3).skills_to_learn == []


class TestMatch:
    def test_defaults_to_pending(self):
        assert _match().status is MatchStatus.PENDING

    def test_self_match_rejected(self):
        with pytest.raises(ValidationError):
            _match(to_user_id=1)

    def test_score_out_of_range(self):
        with pytest.raises(ValidationError):
            _match(score=1.5)

    def test_pair_is_unordered(self):
        assert _match(from_user_id=9, to_user_id=4).pair == (4, 9)
        assert _match(from_user_id=4, to_user_id=9).pair == (4, 9)

    def test_counterpart_of(self):
        match = _match()

        assert match.counterpart_of(1) == 2
        assert match.counterpart_of(2) == 1
        with pytest.raises(ValueError):
            match.counterpart_of(3)

    def test_timestamps_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        match = _match(created_at=datetime(2026, 1, 5, 14, 0, tzinfo=plus_two))

        assert match.created_at == NOW


class TestEnums:
    def test_terminal_states(self):
        assert not MatchStatus.PENDING.is_terminal
        assert MatchStatus.ACCEPTED.is_terminal
        assert MatchStatus.REJECTED.is_terminal

    def test_active_statuses(self):
        assert MatchStatus.active() == (MatchStatus.PENDING, MatchStatus.ACCEPTED)

    def test_decision_resulting_status(self):
        assert MatchDecision.ACCEPT.resulting_status is MatchStatus.ACCEPTED
        assert MatchDecision("reject").resulting_status is MatchStatus.REJECTED


def test_ordered_pair():
    assert ordered_pair(5, 2) == (2, 5)
    assert ordered_pair(2, 5) == (2, 5)
