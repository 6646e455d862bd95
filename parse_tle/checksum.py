"""NORAD mod-10 line checksum."""

from __future__ import annotations

from .errors import ChecksumMismatch, MalformedLine

__all__ = ["checksum", "validate"]


def checksum(line: str) -> int:
    """Return the checksum digit for ``line``.

    The final character is the checksum column and is skipped. Digits add
    their value, ``-`` adds one, everything else adds nothing.
    """

    total = 0
    for ch in line[:-1]:
        if "0" <= ch <= "9":
            total += ord(ch) - ord("0")
        elif ch == "-":
            total += 1
    return total % 10


def validate(line: str, line_number: int) -> int:
    """Check column 69 of ``line`` against :func:`checksum` and return it."""

    if not line:
        raise MalformedLine(line_number, "empty line")
    digit = line[-1]
    if not "0" <= digit <= "9":
        raise MalformedLine(line_number, f"checksum column holds {digit!r}, not a digit")
    expected = int(digit)
    computed = checksum(line)
    if computed != expected:
        raise ChecksumMismatch(line_number, computed, expected)
    return expected
