"""
Time Codec
==========

Bidirectional mapping between textual time tokens and signed integer
coordinates, per resolution.

ENCODING:
=========
- year:  "<int>"             -> int
- month: "<int>-<MM>"        -> year * 12 + month
- day:   "<int>-<MM>-<DD>"   -> days since 1970-01-01 (proleptic Gregorian)

DEGRADED INPUT:
===============
- month token without -MM  -> bare year * 12
- day token without -MM-DD -> bare year * 365 (calendar-approximate)
- anything non-numeric     -> INVALID (NaN); the owning event is dropped
- beyond +/-MAX_COORDINATE -> INVALID

GUARANTEES:
- Total: never raises for a string token
- decode(encode(t)) == t for well-formed tokens (months 01..12)
"""

from __future__ import annotations
from typing import Tuple, Union
import math
import re

from ..contracts.base import Resolution


INVALID = float('nan')

Coordinate = Union[int, float]

_INTEGER = re.compile(r'^[+-]?\d{1,18}$')
_MONTH = re.compile(r'^(-?\d{1,18})-(\d{1,2})$')
_DAY = re.compile(r'^(-?\d{1,18})-(\d{1,2})-(\d{1,2})$')

MONTHS_PER_YEAR = 12
APPROX_DAYS_PER_YEAR = 365

# Coordinates must stay exactly representable as floats for visual positions
MAX_COORDINATE = 2 ** 53

# days_from_civil(1970, 1, 1) relative to 0000-03-01
_EPOCH_SHIFT = 719468
_DAYS_PER_ERA = 146097


def is_valid(value: Coordinate) -> bool:
    """False for the INVALID sentinel."""
    return not (isinstance(value, float) and math.isnan(value))


# =============================================================================
# CALENDAR ARITHMETIC
# =============================================================================

def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Day count since 1970-01-01 for a proleptic Gregorian date.

    Month and day overflow roll over into the following month/year
    (month 13 is January of the next year, day 0 is the last day of
    the previous month). Negative years are supported.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1

    y = year - (1 if month <= 2 else 0)
    era = y // 400
    yoe = y - era * 400
    mp = month - 3 if month > 2 else month + 9
    doy = (153 * mp + 2) // 5
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * _DAYS_PER_ERA + doe - _EPOCH_SHIFT + (day - 1)


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil for in-range month/day."""
    z = days + _EPOCH_SHIFT
    era = z // _DAYS_PER_ERA
    doe = z - era * _DAYS_PER_ERA
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def _parse_int(token: str) -> Coordinate:
    if _INTEGER.match(token):
        return int(token)
    return INVALID


def encode(token: str, resolution: Resolution) -> Coordinate:
    """
    Encode a time token to its integer coordinate.

    Returns INVALID (NaN) when the token carries non-numeric residue or
    lands outside +/-MAX_COORDINATE.
    """
    value = _encode_unbounded(token.strip(), resolution)
    if is_valid(value) and abs(value) > MAX_COORDINATE:
        return INVALID
    return value


def _encode_unbounded(token: str, resolution: Resolution) -> Coordinate:
    if resolution is Resolution.MONTH:
        match = _MONTH.match(token)
        if match:
            return int(match.group(1)) * MONTHS_PER_YEAR + int(match.group(2))
        year = _parse_int(token)
        return year * MONTHS_PER_YEAR if is_valid(year) else INVALID

    if resolution is Resolution.DAY:
        match = _DAY.match(token)
        if match:
            return days_from_civil(
                int(match.group(1)), int(match.group(2)), int(match.group(3))
            )
        # Not calendar-accurate: a bare year is approximated as 365 days
        year = _parse_int(token)
        return year * APPROX_DAYS_PER_YEAR if is_valid(year) else INVALID

    return _parse_int(token)


def decode(value: Coordinate, resolution: Resolution) -> str:
    """
    Format a coordinate back to a token.

    Fractional values are rounded half up first, so axis positions
    that fall between units still get a label.
    """
    value = int(math.floor(value + 0.5))

    if resolution is Resolution.MONTH:
        # Months are 1-based: year * 12 + 12 is December, not month 0
        year, month_index = divmod(value - 1, MONTHS_PER_YEAR)
        return f"{year}-{month_index + 1:02d}"

    if resolution is Resolution.DAY:
        year, month, day = civil_from_days(value)
        return f"{year}-{month:02d}-{day:02d}"

    return str(value)
