"""Tests for datetime_utils module."""

from datetime import date, datetime, timezone

from flagleague.utils.datetime_utils import now_utc, today_utc


class TestNowUtc:
    def test_is_timezone_aware(self):
        result = now_utc()
        assert isinstance(result, datetime)
        assert result.tzinfo == timezone.utc


class TestTodayUtc:
    def test_returns_date(self):
        result = today_utc()
        assert isinstance(result, date)
        assert result == now_utc().date()
