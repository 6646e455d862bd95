from __future__ import annotations

import dataclasses
import datetime as dt
from concurrent.futures import ThreadPoolExecutor

import pytest
from hypothesis import given, strategies as st

from parse_tle import TLE, parse
from parse_tle.errors import (
    ChecksumMismatch,
    FieldParseError,
    InvalidDayOfYear,
    InvalidLineCount,
    MalformedLine,
    TLEError,
)

NAME = "CHANDRAYAAN-3"
LINE1 = "1 57320U 23098A   23208.62000000  .00000392  00000+0  00000+0 0  9994"
LINE2 = "2 57320  21.3360   6.1160 9054012 182.9630  18.4770  0.46841359   195"
BLOCK = f"{NAME}\n{LINE1}\n{LINE2}"

ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   20344.91719907  .00001264  00000-0  29621-4 0  9993"
ISS_LINE2 = "2 25544  51.6466 223.8666 0002416  90.3778  30.6140 15.48970462256430"


def _finalize(line: str) -> str:
    body = line[:-1]
    total = 0
    for ch in body:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return body + str(total % 10)


def _splice(line: str, column: int, text: str) -> str:
    start = column - 1
    return _finalize(line[:start] + text + line[start + len(text) :])


def test_three_line_block_end_to_end() -> None:
    tle = parse(BLOCK)
    assert tle.name == NAME
    assert tle.catalog_number == "57320"
    assert tle.classification == "U"
    assert tle.international_designator == "23098A"
    assert tle.epoch == dt.datetime(2023, 7, 27, 14, 52, 48, tzinfo=dt.timezone.utc)
    assert tle.epoch.year == 2023
    assert tle.mean_motion_1 == 0.00000392
    assert tle.mean_motion_2 == 0.0
    assert tle.radiation_pressure == 0.0
    assert tle.ephemeris_type == 0
    assert tle.element_set_number == 999
    assert tle.inc == 21.336
    assert tle.raan == 6.116
    assert tle.eccentricity == 0.9054012
    assert tle.arg_perigee == 182.963
    assert tle.mean_anomaly == 18.477
    assert tle.mean_motion == 0.46841359
    assert tle.rev_num == 19


def test_two_line_block_uses_international_designator_as_name() -> None:
    tle = parse(f"{ISS_LINE1}\n{ISS_LINE2}\n")
    assert tle.name == "98067A"
    assert tle.catalog_number == "25544"
    assert tle.epoch == dt.datetime(2020, 12, 9, 22, 0, 45, tzinfo=dt.timezone.utc)
    assert tle.radiation_pressure == pytest.approx(2.9621e-5)
    assert tle.mean_anomaly == 30.614
    assert tle.rev_num == 25643


def test_mean_anomaly_uses_column_44() -> None:
    line1 = "1 25544U 98067A   24157.20856222  .00006411  00000+0  11842-3 0  9996"
    line2 = "2 25544  51.6412 205.1217 0004225 113.2939 306.8174 15.50073703551595"
    tle = parse(f"{ISS_NAME}\n{line1}\n{line2}")
    assert tle.mean_anomaly == 306.8174
    assert tle.arg_perigee == 113.2939
    assert tle.rev_num == 55159
    assert tle.epoch == dt.datetime(2024, 6, 5, 5, 0, 19, tzinfo=dt.timezone.utc)


def test_three_le_name_prefix_is_dropped() -> None:
    tle = parse(f"0 {ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}")
    assert tle.name == ISS_NAME


@pytest.mark.parametrize(
    "text",
    [LINE1, f"{NAME}\n{LINE1}\n{LINE2}\n{LINE2}", "", "\n\n"],
)
def test_wrong_line_count(text: str) -> None:
    with pytest.raises(InvalidLineCount):
        parse(text)


def test_line_count_is_reported() -> None:
    with pytest.raises(InvalidLineCount) as excinfo:
        parse(f"A\nB\n{LINE1}\n{LINE2}")
    assert excinfo.value.count == 4


def test_wrong_checksum_on_line_one() -> None:
    with pytest.raises(ChecksumMismatch) as excinfo:
        parse(f"{NAME}\n{LINE1[:-1]}5\n{LINE2}")
    assert (excinfo.value.line_number, excinfo.value.computed, excinfo.value.expected) == (1, 4, 5)


def test_wrong_checksum_on_line_two() -> None:
    with pytest.raises(ChecksumMismatch) as excinfo:
        parse(f"{NAME}\n{LINE1}\n{LINE2[:-1]}0")
    assert excinfo.value.line_number == 2


def test_truncated_line_is_malformed() -> None:
    with pytest.raises(MalformedLine):
        parse(f"{NAME}\n{LINE1}\n{LINE2[:50]}")


def test_swapped_lines_are_malformed() -> None:
    with pytest.raises(MalformedLine):
        parse(f"{LINE2}\n{LINE1}")


def test_unknown_classification() -> None:
    with pytest.raises(FieldParseError) as excinfo:
        parse(f"{_splice(LINE1, 8, 'X')}\n{LINE2}")
    assert excinfo.value.field == "classification"
    assert excinfo.value.columns == (8, 8)


def test_inclination_out_of_range() -> None:
    with pytest.raises(FieldParseError) as excinfo:
        parse(f"{LINE1}\n{_splice(LINE2, 9, '181.0000')}")
    assert excinfo.value.field == "inc"
    assert excinfo.value.raw_text == "181.0000"


def test_raan_upper_bound_is_exclusive() -> None:
    with pytest.raises(FieldParseError, match="raan"):
        parse(f"{LINE1}\n{_splice(LINE2, 18, '360.0000')}")


def test_day_366_in_common_year() -> None:
    with pytest.raises(InvalidDayOfYear):
        parse(f"{_splice(ISS_LINE1, 19, '23366.50000000')}\n{ISS_LINE2}")


def test_day_366_in_leap_year() -> None:
    tle = parse(f"{_splice(ISS_LINE1, 19, '24366.50000000')}\n{ISS_LINE2}")
    assert tle.epoch == dt.datetime(2024, 12, 31, 12, 0, 0, tzinfo=dt.timezone.utc)


def test_errors_share_a_value_error_base() -> None:
    with pytest.raises(ValueError):
        parse("garbage")
    assert issubclass(TLEError, ValueError)


def test_record_is_immutable() -> None:
    tle = parse(BLOCK)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tle.inc = 0.0  # type: ignore[misc]
    changed = dataclasses.replace(tle, rev_num=20)
    assert changed.rev_num == 20
    assert tle.rev_num == 19


def test_display_lists_every_field() -> None:
    rendered = str(parse(BLOCK))
    lines = rendered.splitlines()
    assert len(lines) == len(TLE.fields())
    assert lines[0].startswith("Name")
    assert lines[0].endswith(": CHANDRAYAAN-3")
    assert "2023-07-27 14:52:48 UTC" in rendered
    assert "Revolution Number" in rendered


def test_concurrent_parsing_is_independent() -> None:
    blocks = [BLOCK, f"{ISS_LINE1}\n{ISS_LINE2}"] * 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(parse, blocks))
    assert all(tle == results[0] for tle in results[::2])
    assert all(tle == results[1] for tle in results[1::2])


def _noisy_block(include_name: bool, leading: int, trailing: int, pad: str) -> str:
    lines = [""] * leading
    if include_name:
        lines.append(pad + NAME + pad)
    lines.extend([pad + LINE1 + pad, pad + LINE2 + pad])
    lines.extend([""] * trailing)
    return "\n".join(lines)


@given(
    st.booleans(),
    st.integers(min_value=0, max_value=3),
    st.integers(min_value=0, max_value=3),
    st.sampled_from(["", " ", "\t", "  "]),
)
def test_surrounding_whitespace_is_tolerated(include_name: bool, leading: int, trailing: int, pad: str) -> None:
    tle = parse(_noisy_block(include_name, leading, trailing, pad))
    assert tle.catalog_number == "57320"
    assert tle.name == (NAME if include_name else "23098A")


def test_padded_eccentricity_fails_instead_of_shifting() -> None:
    with pytest.raises(FieldParseError) as excinfo:
        parse(f"{ISS_LINE1}\n{_splice(ISS_LINE2, 27, '  02416')}")
    assert excinfo.value.field == "eccentricity"
