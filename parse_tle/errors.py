"""Error taxonomy for TLE decoding.

Every failure raised while decoding a block derives from :class:`TLEError`,
which is a :class:`ValueError` so callers that already guard TLE handling
with ``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Optional, Tuple

__all__ = [
    "TLEError",
    "InvalidLineCount",
    "MalformedLine",
    "ChecksumMismatch",
    "FieldParseError",
    "InvalidDayOfYear",
    "CodecError",
]


class TLEError(ValueError):
    """Base class for every TLE decoding failure."""


class InvalidLineCount(TLEError):
    """The block did not contain two or three lines."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"expected 2 or 3 lines, got {count}")


class MalformedLine(TLEError):
    """A data line cannot be addressed by column."""

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class ChecksumMismatch(TLEError):
    """The mod-10 checksum of a line disagrees with its column 69 digit."""

    def __init__(self, line_number: int, computed: int, expected: int) -> None:
        self.line_number = line_number
        self.computed = computed
        self.expected = expected
        super().__init__(
            f"line {line_number}: checksum mismatch (computed {computed}, column 69 holds {expected})"
        )


class FieldParseError(TLEError):
    """A field could not be decoded from its columns."""

    def __init__(self, field: str, columns: Tuple[int, int], raw_text: str, reason: Optional[str] = None) -> None:
        self.field = field
        self.columns = columns
        self.raw_text = raw_text
        self.reason = reason
        start, end = columns
        span = f"column {start}" if start == end else f"columns {start}-{end}"
        message = f"{field} ({span}): cannot decode {raw_text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidDayOfYear(TLEError):
    """The epoch day-of-year does not exist in the epoch year."""

    def __init__(self, day_of_year: int, year: int) -> None:
        self.day_of_year = day_of_year
        self.year = year
        super().__init__(f"day of year {day_of_year} is not valid for {year}")


class CodecError(TLEError):
    """Raised when a persisted record cannot be turned back into a TLE."""
