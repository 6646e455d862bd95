"""Decoder for NORAD Two-Line Element (TLE) sets.

Typical use::

    from parse_tle import parse, dumps

    tle = parse(text)
    print(tle)
    print(dumps(tle))

:func:`parse` decodes one 2-line or 3-line block into an immutable
:class:`TLE`; :func:`parse_many` handles multi-record payloads. Failures are
raised as subclasses of :class:`TLEError`.
"""

from .checksum import checksum, validate
from .codec import dumps, from_dict, loads, output_path_for, read_json, to_dict, write_json
from .epoch import calc_month_day, is_leap_year, resolve_epoch, resolve_year, split_day_fraction
from .errors import (
    ChecksumMismatch,
    CodecError,
    FieldParseError,
    InvalidDayOfYear,
    InvalidLineCount,
    MalformedLine,
    TLEError,
)
from .parser import BatchItem, parse, parse_file, parse_many, split_blocks
from .record import TLE

__version__ = "0.1.0"

__all__ = [
    "BatchItem",
    "ChecksumMismatch",
    "CodecError",
    "FieldParseError",
    "InvalidDayOfYear",
    "InvalidLineCount",
    "MalformedLine",
    "TLE",
    "TLEError",
    "calc_month_day",
    "checksum",
    "dumps",
    "from_dict",
    "is_leap_year",
    "loads",
    "output_path_for",
    "parse",
    "parse_file",
    "parse_many",
    "read_json",
    "resolve_epoch",
    "resolve_year",
    "split_blocks",
    "split_day_fraction",
    "to_dict",
    "validate",
    "write_json",
]
