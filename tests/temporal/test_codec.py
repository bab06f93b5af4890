"""
Time Codec Tests
================

INVARIANTS TESTED:
1. Well-formed tokens round-trip through encode/decode
2. Degraded month/day tokens fall back to bare-year arithmetic
3. Non-numeric or out-of-range tokens encode to the INVALID sentinel
4. Day arithmetic agrees with the proleptic Gregorian calendar
"""

import math
import pytest
from datetime import date
from hypothesis import given, strategies as st

from chronostack.contracts.base import Resolution
from chronostack.temporal.codec import (
    MAX_COORDINATE, encode, decode, is_valid, days_from_civil, civil_from_days
)


EPOCH_ORDINAL = date(1970, 1, 1).toordinal()


class TestYearCodec:

    def test_plain_year(self):
        assert encode("2020", Resolution.YEAR) == 2020

    def test_negative_year(self):
        assert encode("-361", Resolution.YEAR) == -361

    def test_surrounding_whitespace_is_ignored(self):
        assert encode("  25 ", Resolution.YEAR) == 25

    @pytest.mark.parametrize("token", ["abc", "12abc", "", "1.5", "20 20"])
    def test_non_numeric_is_invalid(self, token):
        value = encode(token, Resolution.YEAR)
        assert math.isnan(value)
        assert not is_valid(value)

    def test_decode_rounds_half_up(self):
        assert decode(760.4, Resolution.YEAR) == "760"
        assert decode(760.5, Resolution.YEAR) == "761"
        assert decode(-0.5, Resolution.YEAR) == "0"


class TestMonthCodec:

    def test_encode(self):
        assert encode("2020-05", Resolution.MONTH) == 2020 * 12 + 5

    def test_december_round_trips(self):
        value = encode("2020-12", Resolution.MONTH)
        assert decode(value, Resolution.MONTH) == "2020-12"

    def test_single_digit_month(self):
        assert encode("2020-5", Resolution.MONTH) == encode("2020-05", Resolution.MONTH)

    def test_negative_year_month(self):
        value = encode("-361-05", Resolution.MONTH)
        assert value == -361 * 12 + 5
        assert decode(value, Resolution.MONTH) == "-361-05"

    def test_bare_year_fallback(self):
        assert encode("2020", Resolution.MONTH) == 2020 * 12

    def test_garbage_is_invalid(self):
        assert not is_valid(encode("20x0-05", Resolution.MONTH))
        assert not is_valid(encode("spring", Resolution.MONTH))


class TestDayCodec:

    def test_epoch_is_zero(self):
        assert encode("1970-01-01", Resolution.DAY) == 0
        assert decode(0, Resolution.DAY) == "1970-01-01"

    def test_day_before_epoch(self):
        assert encode("1969-12-31", Resolution.DAY) == -1

    def test_matches_calendar(self):
        expected = date(2000, 3, 1).toordinal() - EPOCH_ORDINAL
        assert encode("2000-03-01", Resolution.DAY) == expected

    def test_consecutive_days(self):
        start = encode("2020-01-01", Resolution.DAY)
        end = encode("2020-01-14", Resolution.DAY)
        assert end - start == 13

    def test_month_overflow_rolls_into_next_year(self):
        assert encode("2020-13-01", Resolution.DAY) == encode("2021-01-01", Resolution.DAY)

    def test_day_overflow_rolls_into_next_month(self):
        assert encode("2021-02-29", Resolution.DAY) == encode("2021-03-01", Resolution.DAY)

    def test_negative_year_round_trip(self):
        value = encode("-44-03-15", Resolution.DAY)
        assert decode(value, Resolution.DAY) == "-44-03-15"

    def test_bare_year_fallback_is_approximate(self):
        assert encode("2020", Resolution.DAY) == 2020 * 365

    def test_garbage_is_invalid(self):
        assert not is_valid(encode("2020-01-xx", Resolution.DAY))


class TestCoordinateBounds:
    """Tokens that decode to out-of-range coordinates are INVALID, not errors."""

    @pytest.mark.parametrize("digits", [19, 400, 5000])
    def test_oversized_year_is_invalid(self, digits):
        assert not is_valid(encode("9" * digits, Resolution.YEAR))
        assert not is_valid(encode("-" + "9" * digits, Resolution.YEAR))

    def test_limit_is_inclusive(self):
        assert encode(str(MAX_COORDINATE), Resolution.YEAR) == MAX_COORDINATE
        assert encode(str(-MAX_COORDINATE), Resolution.YEAR) == -MAX_COORDINATE
        assert not is_valid(encode(str(MAX_COORDINATE + 1), Resolution.YEAR))

    def test_month_past_limit_is_invalid(self):
        year = MAX_COORDINATE // 12 + 1
        assert not is_valid(encode(f"{year}-01", Resolution.MONTH))
        assert not is_valid(encode(str(year), Resolution.MONTH))

    def test_day_past_limit_is_invalid(self):
        assert not is_valid(encode("99999999999999-01-01", Resolution.DAY))
        assert not is_valid(encode("99999999999999", Resolution.DAY))
        assert not is_valid(encode("9" * 400 + "-01-01", Resolution.DAY))


class TestCalendarArithmetic:

    @given(st.dates())
    def test_days_from_civil_matches_ordinal(self, d):
        assert days_from_civil(d.year, d.month, d.day) == d.toordinal() - EPOCH_ORDINAL

    @given(st.integers(min_value=-2_000_000, max_value=2_000_000))
    def test_civil_from_days_inverts(self, days):
        year, month, day = civil_from_days(days)
        assert 1 <= month <= 12
        assert 1 <= day <= 31
        assert days_from_civil(year, month, day) == days


class TestRoundTrip:

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_year(self, year):
        assert decode(encode(str(year), Resolution.YEAR), Resolution.YEAR) == str(year)

    @given(
        st.integers(min_value=-3000, max_value=3000),
        st.integers(min_value=1, max_value=12),
    )
    def test_month(self, year, month):
        token = f"{year}-{month:02d}"
        assert decode(encode(token, Resolution.MONTH), Resolution.MONTH) == token

    @given(st.dates(min_value=date(1000, 1, 1)))
    def test_day(self, d):
        token = d.isoformat()
        assert decode(encode(token, Resolution.DAY), Resolution.DAY) == token
