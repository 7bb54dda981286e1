"""Tests for utils/parsing.py and utils/datetime_utils.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from survivor_pool.db.pool import Phase
from survivor_pool.errors import ValidationError
from survivor_pool.utils.datetime_utils import epoch_to_utc, ensure_utc, season_window
from survivor_pool.utils.parsing import (
    format_week_label,
    leading_int,
    parse_identifier,
    parse_int,
    parse_phase,
    parse_season,
    parse_week_argument,
    parse_week_label,
)


class TestParseWeekLabel:
    def test_regular_season(self):
        assert parse_week_label("REG3") == (Phase.reg, 3)

    def test_lowercase_with_space(self):
        assert parse_week_label(" pre 2 ") == (Phase.pre, 2)

    def test_postseason(self):
        assert parse_week_label("POST1") == (Phase.post, 1)

    @pytest.mark.parametrize("label", ["", "WK3", "REG", "REG-3", "REG0", "3"])
    def test_rejects_invalid(self, label):
        with pytest.raises(ValidationError):
            parse_week_label(label)

    def test_format_round_trips_label(self):
        assert format_week_label("post", 2) == "POST2"


class TestParseWeekArgument:
    def test_bare_number_defaults_to_regular_season(self):
        assert parse_week_argument("4") == (Phase.reg, 4)

    def test_bare_number_with_phase(self):
        assert parse_week_argument("2", "post") == (Phase.post, 2)

    def test_label(self):
        assert parse_week_argument("PRE1") == (Phase.pre, 1)

    def test_zero_rejected(self):
        with pytest.raises(ValidationError):
            parse_week_argument("0")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="PRE1/REG1/POST1"):
            parse_week_argument("week four")

    def test_superscript_digit_rejected(self):
        with pytest.raises(ValidationError):
            parse_week_argument("²")


class TestParsePhase:
    def test_accepts_enum(self):
        assert parse_phase(Phase.post) is Phase.post

    def test_case_insensitive(self):
        assert parse_phase(" REG ") is Phase.reg

    def test_unknown_phase(self):
        with pytest.raises(ValidationError, match="Invalid phase"):
            parse_phase("playoffs")


class TestIdentifiers:
    def test_numeric_string(self):
        assert parse_identifier("42", "user_id") == 42

    @pytest.mark.parametrize("value", [None, "", "abc", "-1", 0, True, "²", "٣"])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            parse_identifier(value, "user_id")

    def test_season(self):
        assert parse_season("2025") == 2025

    def test_bad_season(self):
        with pytest.raises(ValidationError):
            parse_season("25")


class TestParseInt:
    def test_float_string(self):
        assert parse_int("17.0") == 17

    @pytest.mark.parametrize("value", [None, "", "-", "n/a"])
    def test_missing(self, value):
        assert parse_int(value) is None


class TestLeadingInt:
    @pytest.mark.parametrize(
        "token,expected",
        [("Week 3", 3), ("REG 12", 12), (7, 7), ("wk-04", 4), ("Wild Card", None), (None, None)],
    )
    def test_leading_int(self, token, expected):
        assert leading_int(token) == expected


class TestDatetimeUtils:
    def test_season_window_is_calendar_year(self):
        start, end = season_window(2025)
        assert start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert end == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_epoch_zero_is_unknown(self):
        assert epoch_to_utc(0) is None
        assert epoch_to_utc(None) is None

    def test_epoch_to_utc(self):
        assert epoch_to_utc(1735689600) == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_epoch_out_of_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            epoch_to_utc(1759680000000)

    def test_ensure_utc_naive(self):
        naive = datetime(2025, 9, 7, 17, 0)
        assert ensure_utc(naive).tzinfo == timezone.utc
