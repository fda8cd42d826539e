"""Tests for utils/timezone.py - UTC-everywhere time handling."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from utils.timezone import now_utc, to_utc


class TestNowUtc:
    """Tests for now_utc()."""

    def test_returns_timezone_aware(self):
        assert now_utc().tzinfo is not None

    def test_is_utc(self):
        assert now_utc().tzinfo == timezone.utc


class TestToUtc:
    """Tests for to_utc()."""

    def test_raises_on_naive(self):
        with pytest.raises(ValueError, match="naive"):
            to_utc(datetime(2026, 1, 1, 12, 0, 0))

    def test_converts_other_timezone(self):
        """Toronto 12:00 in January should become UTC 17:00."""
        toronto = datetime(2026, 1, 15, 12, 0, 0, tzinfo=ZoneInfo("America/Toronto"))
        result = to_utc(toronto)
        assert result.tzinfo == timezone.utc
        assert result.hour == 17
