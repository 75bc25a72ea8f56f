"""
Tests for ISO 8601 duration parsing.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from videoscripter.models.catalog import format_duration
from videoscripter.utils.duration import parse_iso8601_duration


class TestParseIso8601Duration:
    """Tests for parse_iso8601_duration."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("PT1H30M15S", 5415),
            ("PT5M3S", 303),
            ("PT45S", 45),
            ("PT2H", 7200),
            ("PT10M", 600),
            ("P1DT2H", 93600),
            ("P0D", 0),
            ("PT0S", 0),
        ],
    )
    def test_valid_durations(self, value: str, expected: int) -> None:
        assert parse_iso8601_duration(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "5 minutes", "1:30", "PTXS"])
    def test_empty_or_malformed_is_zero(self, value) -> None:
        assert parse_iso8601_duration(value) == 0

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse_iso8601_duration("  PT1M  ") == 60

    @given(
        hours=st.integers(min_value=0, max_value=99),
        minutes=st.integers(min_value=0, max_value=59),
        seconds=st.integers(min_value=0, max_value=59),
    )
    def test_components_add_up(self, hours: int, minutes: int, seconds: int) -> None:
        value = f"PT{hours}H{minutes}M{seconds}S"
        assert parse_iso8601_duration(value) == hours * 3600 + minutes * 60 + seconds

    @given(st.text(alphabet="0123456789 :abcxyz", max_size=20))
    def test_never_raises_on_garbage(self, value: str) -> None:
        assert parse_iso8601_duration(value) >= 0


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (45, "0:45"), (303, "5:03"), (3600, "1:00:00"), (5415, "1:30:15")],
    )
    def test_format(self, seconds: int, expected: str) -> None:
        assert format_duration(seconds) == expected

    def test_negative_clamps_to_zero(self) -> None:
        assert format_duration(-5) == "0:00"
