"""Fixed-column layout of the two TLE data lines and typed field access.

Columns are 1-based and inclusive, matching the published NORAD layout::

    1 AAAAAC BBBBBBBB CCCCC.CCCCCCCC SDDDDDDDDD SEEEEESE SFFFFFSF G HHHHZ
    2 AAAAA III.IIII JJJ.JJJJ KKKKKKK LLL.LLLL MMM.MMMM NN.NNNNNNNNOOOOOZ
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Mapping, Tuple

from .checksum import validate
from .errors import FieldParseError, MalformedLine

__all__ = ["LINE_LENGTH", "Field", "LINE1_FIELDS", "LINE2_FIELDS", "Line"]

LINE_LENGTH = 69

_REAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_DIGITS = re.compile(r"\d+")
_EPOCH = re.compile(r"(\d{2})( *\d{1,3})\.(\d+) *")
_SIGNS = {" ": 1, "+": 1, "-": -1}


@dataclass(frozen=True)
class Field:
    """A named, inclusive 1-based column span."""

    name: str
    start: int
    end: int

    @property
    def columns(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def extract(self, line: str) -> str:
        return line[self.start - 1 : self.end]


def _fields(*specs: Tuple[str, int, int]) -> Mapping[str, Field]:
    return {name: Field(name, start, end) for name, start, end in specs}


LINE1_FIELDS = _fields(
    ("line_number", 1, 1),
    ("catalog_number", 3, 7),
    ("classification", 8, 8),
    ("international_designator", 10, 17),
    ("epoch", 19, 32),
    ("mean_motion_1", 34, 43),
    ("mean_motion_2", 45, 52),
    ("radiation_pressure", 54, 61),
    ("ephemeris_type", 63, 63),
    ("element_set_number", 65, 68),
    ("checksum", 69, 69),
)

LINE2_FIELDS = _fields(
    ("line_number", 1, 1),
    ("catalog_number", 3, 7),
    ("inc", 9, 16),
    ("raan", 18, 25),
    ("eccentricity", 27, 33),
    ("arg_perigee", 35, 42),
    ("mean_anomaly", 44, 51),
    ("mean_motion", 53, 63),
    ("rev_num", 64, 68),
    ("checksum", 69, 69),
)

_LAYOUTS = {1: LINE1_FIELDS, 2: LINE2_FIELDS}


class Line:
    """One validated 69-column data line.

    Build instances through :meth:`checked`, which rejects anything that
    cannot be addressed by column and verifies the checksum before any field
    is read.
    """

    __slots__ = ("text", "number", "_layout")

    def __init__(self, text: str, number: int) -> None:
        self.text = text
        self.number = number
        self._layout = _LAYOUTS[number]

    @classmethod
    def checked(cls, text: str, number: int) -> "Line":
        if number not in _LAYOUTS:
            raise MalformedLine(number, "only data lines 1 and 2 exist")
        if not text.isascii():
            raise MalformedLine(number, "contains non-ASCII characters")
        if len(text) != LINE_LENGTH:
            raise MalformedLine(number, f"expected {LINE_LENGTH} columns, got {len(text)}")
        if text[0] != str(number):
            raise MalformedLine(number, f"column 1 holds {text[0]!r}, expected '{number}'")
        validate(text, number)
        return cls(text, number)

    def field(self, name: str) -> Field:
        return self._layout[name]

    def raw(self, name: str) -> str:
        return self.field(name).extract(self.text)

    def _fail(self, name: str, raw: str, reason: str) -> FieldParseError:
        return FieldParseError(name, self.field(name).columns, raw, reason)

    # -- typed accessors -------------------------------------------------

    def text_field(self, name: str) -> str:
        """Trimmed text; empty fields are an error."""

        raw = self.raw(name)
        value = raw.strip()
        if not value:
            raise self._fail(name, raw, "field is blank")
        return value

    def integer(self, name: str) -> int:
        raw = self.raw(name)
        value = raw.strip()
        if not _DIGITS.fullmatch(value):
            raise self._fail(name, raw, "expected an unsigned integer")
        return int(value)

    def real(self, name: str) -> float:
        raw = self.raw(name)
        value = raw.strip()
        if not _REAL.fullmatch(value):
            raise self._fail(name, raw, "expected a decimal number")
        return float(value)

    def implied_decimal(self, name: str, signed: bool = True) -> float:
        """Decode ``[sign]digits`` as ``sign * 0.digits``.

        A literal decimal point in front of the digits is tolerated, since
        line 1 usually carries one in the first derivative field. Blanks are
        rejected: the position of each digit carries its magnitude.
        """

        raw = self.raw(name)
        sign = 1
        body = raw
        if signed:
            if raw[0] not in _SIGNS:
                raise self._fail(name, raw, f"invalid sign {raw[0]!r}")
            sign = _SIGNS[raw[0]]
            body = raw[1:]
        digits = body[1:] if body.startswith(".") else body
        if not _DIGITS.fullmatch(digits):
            raise self._fail(name, raw, "expected digits with an implied leading decimal point")
        return sign * float(f"0.{digits}")

    def exponent(self, name: str) -> float:
        """Decode ``SMMMMMSE`` as ``sign * 0.MMMMM * 10**(SE)``."""

        raw = self.raw(name)
        sign_char, mantissa, exp_sign, exp_digit = raw[0], raw[1:6], raw[6], raw[7]
        if sign_char not in _SIGNS:
            raise self._fail(name, raw, f"invalid sign {sign_char!r}")
        if not _DIGITS.fullmatch(mantissa):
            raise self._fail(name, raw, "mantissa must be five digits")
        if exp_sign not in _SIGNS or not exp_digit.isdigit():
            raise self._fail(name, raw, "exponent must be a sign and one digit")
        exponent = _SIGNS[exp_sign] * int(exp_digit)
        return _SIGNS[sign_char] * float(f"0.{mantissa}e{exponent}")

    def epoch_parts(self, name: str = "epoch") -> Tuple[int, int, Fraction]:
        """Split ``YYDDD.DDDDDDDD`` into ``(year2, day_of_year, fraction)``."""

        raw = self.raw(name)
        match = _EPOCH.fullmatch(raw)
        if not match:
            raise self._fail(name, raw, "expected YYDDD.DDDDDDDD")
        year2, day, digits = match.groups()
        fraction = Fraction(int(digits), 10 ** len(digits))
        return int(year2), int(day), fraction
