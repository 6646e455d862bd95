"""Decode 2-line and 3-line TLE blocks into :class:`~parse_tle.record.TLE`.

:func:`parse` handles exactly one block and raises the first
:class:`~parse_tle.errors.TLEError` it meets. :func:`parse_many` splits a
multi-record payload (a CelesTrak response, a catalogue file) into blocks
and parses each one on its own, so a single bad record does not hide the
others.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .columns import Line
from .epoch import resolve_epoch
from .errors import FieldParseError, InvalidLineCount, TLEError
from .logging import get_logger, log_context
from .record import TLE

__all__ = ["BatchItem", "parse", "parse_file", "parse_many", "split_blocks"]

LOGGER = get_logger(__name__)

_CLASSIFICATIONS = frozenset("UCS")
_DATA_PREFIXES = ("1 ", "2 ")
# (field, lower bound, upper bound, upper bound inclusive)
_ANGLE_RANGES = (
    ("inc", 0.0, 180.0, True),
    ("raan", 0.0, 360.0, False),
    ("arg_perigee", 0.0, 360.0, False),
    ("mean_anomaly", 0.0, 360.0, False),
)


@dataclasses.dataclass(frozen=True)
class BatchItem:
    """Outcome of parsing one block of a multi-record payload."""

    index: int
    block: str
    record: Optional[TLE] = None
    error: Optional[TLEError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _expect_lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def _classify_block(lines: Sequence[str]) -> Tuple[Optional[str], str, str]:
    if len(lines) == 3:
        name = lines[0]
        if name.startswith("0 "):
            name = name[2:].strip()
        return name, lines[1], lines[2]
    if len(lines) == 2:
        return None, lines[0], lines[1]
    raise InvalidLineCount(len(lines))


def _decode_line1(line: Line) -> dict:
    classification = line.text_field("classification")
    if classification not in _CLASSIFICATIONS:
        raise FieldParseError(
            "classification",
            line.field("classification").columns,
            line.raw("classification"),
            "expected one of U, C, S",
        )
    year2, day_of_year, fraction = line.epoch_parts("epoch")
    return {
        "catalog_number": line.text_field("catalog_number"),
        "classification": classification,
        "international_designator": line.raw("international_designator").strip(),
        "epoch": resolve_epoch(year2, day_of_year, fraction),
        "mean_motion_1": line.implied_decimal("mean_motion_1"),
        "mean_motion_2": line.exponent("mean_motion_2"),
        "radiation_pressure": line.exponent("radiation_pressure"),
        "ephemeris_type": line.integer("ephemeris_type"),
        "element_set_number": line.integer("element_set_number"),
    }


def _decode_line2(line: Line) -> dict:
    values = {
        "inc": line.real("inc"),
        "raan": line.real("raan"),
        "eccentricity": line.implied_decimal("eccentricity", signed=False),
        "arg_perigee": line.real("arg_perigee"),
        "mean_anomaly": line.real("mean_anomaly"),
        "mean_motion": line.real("mean_motion"),
        "rev_num": line.integer("rev_num"),
    }
    for name, low, high, inclusive in _ANGLE_RANGES:
        value = values[name]
        above = value > high if inclusive else value >= high
        if value < low or above:
            bracket = "]" if inclusive else ")"
            raise FieldParseError(
                name,
                line.field(name).columns,
                line.raw(name),
                f"{value} is outside [{low:g}, {high:g}{bracket}",
            )
    return values


def parse(text: str) -> TLE:
    """Decode a single 2-line or 3-line TLE block."""

    name, text1, text2 = _classify_block(_expect_lines(text))

    line1 = Line.checked(text1, 1)
    fields = _decode_line1(line1)

    line2 = Line.checked(text2, 2)
    fields.update(_decode_line2(line2))

    catalog2 = line2.raw("catalog_number").strip()
    if catalog2 != fields["catalog_number"]:
        LOGGER.warning(
            "catalog number differs between lines: %s vs %s", fields["catalog_number"], catalog2
        )

    if not name:
        name = fields["international_designator"] or fields["catalog_number"]
    record = TLE(name=name, **fields)
    LOGGER.debug("decoded %s (catalog %s) epoch %s", record.name, record.catalog_number, record.epoch.isoformat())
    return record


def split_blocks(text: str) -> List[str]:
    """Group a multi-record payload into individual TLE blocks.

    A record is a line 1 directly followed by a line 2, plus the non-data
    line right before them as its name. Lines that belong to no such pair
    are returned as their own block so the caller sees them fail instead of
    silently disappearing.
    """

    lines = _expect_lines(text)
    blocks: List[str] = []
    pending: List[str] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        if line.startswith("1 ") and idx + 1 < len(lines) and lines[idx + 1].startswith("2 "):
            record = [line, lines[idx + 1]]
            if pending and not pending[-1].startswith(_DATA_PREFIXES):
                record.insert(0, pending.pop())
            if pending:
                blocks.append("\n".join(pending))
                pending = []
            blocks.append("\n".join(record))
            idx += 2
            continue
        pending.append(line)
        idx += 1
    if pending:
        blocks.append("\n".join(pending))
    return blocks


def parse_many(text: str) -> List[BatchItem]:
    """Parse every block of ``text``; failures are collected, not raised."""

    items: List[BatchItem] = []
    for index, block in enumerate(split_blocks(text)):
        try:
            record = parse(block)
        except TLEError as exc:
            with log_context(block_index=index):
                LOGGER.warning("skipping block %d: %s", index, exc)
            items.append(BatchItem(index=index, block=block, error=exc))
        else:
            items.append(BatchItem(index=index, block=block, record=record))
    return items


def parse_file(path: Union[str, Path]) -> List[BatchItem]:
    """Read ``path`` as UTF-8 and :func:`parse_many` its contents."""

    file_path = Path(path).expanduser()
    return parse_many(file_path.read_text(encoding="utf-8"))
