"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from skillmatch.utils.timestamps import (
    ensure_utc,
    format_for_storage,
    parse_from_storage,
    utc_now,
)


class TestUtcNow:
    def test_utc_now_returns_utc_datetime(self):
        now = utc_now()

        assert now.tzinfo == timezone.utc
        assert isinstance(now, datetime)

    def test_utc_now_is_recent(self):
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestEnsureUtc:
    def test_none(self):
        assert ensure_utc(None) is None

    def test_naive_datetime_is_treated_as_utc(self):
        result = ensure_utc(datetime(2026, 1, 5, 12, 0, 0))

        assert result.tzinfo == timezone.utc
        assert result.hour == 12

    def test_other_timezone_is_converted(self):
        plus_two = timezone(timedelta(hours=2))
        result = ensure_utc(datetime(2026, 1, 5, 12, 0, 0, tzinfo=plus_two))

        assert result.tzinfo == timezone.utc
        assert result.hour == 10


class TestStorageFormat:
    def test_format_uses_microseconds_and_z_suffix(self):
        dt = datetime(2026, 1, 5, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert format_for_storage(dt) == "2026-01-05T12:30:45.123456Z"

    def test_format_none(self):
        assert format_for_storage(None) is None

    def test_parse_restores_value(self):
        dt = datetime(2026, 1, 5, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert parse_from_storage(format_for_storage(dt)) == dt

    def test_parse_without_fraction(self):
        parsed = parse_from_storage("2026-01-05T12:30:45Z")

        assert parsed == datetime(2026, 1, 5, 12, 30, 45, tzinfo=timezone.utc)

    def test_parse_empty(self):
        assert parse_from_storage(None) is None
        assert parse_from_storage("") is None

    def test_lexicographic_order_matches_chronological_order(self):
        earlier = datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)
        later = earlier + timedelta(microseconds=1)

        assert format_for_storage(earlier) < format_for_storage(later)
