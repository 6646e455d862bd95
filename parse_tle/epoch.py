"""Epoch reconstruction for TLE line 1.

The epoch is stored as ``YYDDD.DDDDDDDD``: a two digit year, a day of the
year and a fraction of that day. The helpers below turn those pieces into a
timezone-aware UTC :class:`datetime.datetime`.
"""

from __future__ import annotations

import datetime as dt
import math
from fractions import Fraction
from numbers import Rational
from typing import Tuple, Union

from .errors import InvalidDayOfYear

__all__ = [
    "CENTURY_PIVOT",
    "is_leap_year",
    "resolve_year",
    "month_lengths",
    "calc_month_day",
    "split_day_fraction",
    "resolve_epoch",
]

# Two digit years below the pivot belong to the 2000s (first launch was 1957).
CENTURY_PIVOT = 57

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_LEAP_MONTH_LENGTHS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

FractionLike = Union[Fraction, Rational, float, int, str]


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""

    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def resolve_year(year2: int) -> int:
    """Expand a two digit TLE year to a four digit one."""

    if year2 < CENTURY_PIVOT:
        return 2000 + year2
    return 1900 + year2


def month_lengths(year: int) -> Tuple[int, ...]:
    return _LEAP_MONTH_LENGTHS if is_leap_year(year) else _MONTH_LENGTHS


def calc_month_day(day_of_year: int, year: int) -> Tuple[int, int]:
    """Convert a 1-based ``day_of_year`` in ``year`` to ``(month, day)``.

    Raises :class:`InvalidDayOfYear` when the day does not exist in that
    year (zero or negative, past December 31st).
    """

    lengths = month_lengths(year)
    if day_of_year < 1 or day_of_year > sum(lengths):
        raise InvalidDayOfYear(day_of_year, year)

    remaining = day_of_year
    for month, length in enumerate(lengths, start=1):
        if remaining <= length:
            return month, remaining
        remaining -= length
    raise InvalidDayOfYear(day_of_year, year)


def _as_fraction(value: FractionLike) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, str):
        return Fraction(value.strip())
    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)
    return Fraction(value)


def split_day_fraction(fraction: FractionLike) -> Tuple[int, int, int]:
    """Split a fraction of a day into whole ``(hours, minutes, seconds)``.

    Each step floors and carries the non-negative remainder forward, so
    seconds are truncated rather than rounded. Strings and rationals are
    handled exactly; floats are taken at their exact binary value.
    """

    value = _as_fraction(fraction)
    hours, remainder = divmod(value * 24, 1)
    minutes, remainder = divmod(remainder * 60, 1)
    seconds = math.floor(remainder * 60)
    return int(hours), int(minutes), int(seconds)


def resolve_epoch(year2: int, day_of_year: int, fraction: FractionLike) -> dt.datetime:
    """Combine the epoch fields of line 1 into a UTC timestamp."""

    year = resolve_year(year2)
    month, day = calc_month_day(day_of_year, year)
    hours, minutes, seconds = split_day_fraction(fraction)
    base = dt.datetime(year, month, day, tzinfo=dt.timezone.utc)
    return base + dt.timedelta(hours=hours, minutes=minutes, seconds=seconds)
