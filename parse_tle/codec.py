"""JSON persistence for decoded TLE records.

The persisted form is a flat object with one key per :class:`TLE` field.
Numbers stay JSON numbers and the epoch is an ISO-8601 string carrying its
UTC offset, so ``from_dict(to_dict(tle)) == tle`` holds exactly.
"""

from __future__ import annotations

import datetime as dt
import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .errors import CodecError
from .logging import get_logger
from .record import TLE

__all__ = [
    "from_dict",
    "to_dict",
    "dumps",
    "loads",
    "read_json",
    "write_json",
    "output_path_for",
]

LOGGER = get_logger(__name__)

_STRING_FIELDS = ("name", "catalog_number", "classification", "international_designator")
_INT_FIELDS = ("ephemeris_type", "element_set_number", "rev_num")
_FLOAT_FIELDS = (
    "mean_motion_1",
    "mean_motion_2",
    "radiation_pressure",
    "inc",
    "raan",
    "eccentricity",
    "arg_perigee",
    "mean_anomaly",
    "mean_motion",
)
_UNSAFE_PATH_CHARS = re.compile(r"[^\w.()+-]+")

PathLike = Union[str, Path]


def to_dict(tle: TLE) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for name in TLE.fields():
        value = getattr(tle, name)
        if isinstance(value, dt.datetime):
            value = value.isoformat()
        payload[name] = value
    return payload


def _parse_epoch(value: Any) -> dt.datetime:
    if not isinstance(value, str):
        raise CodecError(f"epoch must be an ISO-8601 string, got {type(value).__name__}")
    try:
        epoch = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise CodecError(f"epoch {value!r} is not ISO-8601") from exc
    if epoch.tzinfo is None:
        raise CodecError(f"epoch {value!r} has no UTC offset")
    return epoch.astimezone(dt.timezone.utc)


def from_dict(data: Mapping[str, Any]) -> TLE:
    """Rebuild a :class:`TLE` from :func:`to_dict` output."""

    if not isinstance(data, Mapping):
        raise CodecError(f"expected a JSON object, got {type(data).__name__}")
    expected = set(TLE.fields())
    missing = sorted(expected - set(data))
    if missing:
        raise CodecError(f"missing keys: {', '.join(missing)}")
    unknown = sorted(set(data) - expected)
    if unknown:
        raise CodecError(f"unknown keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {"epoch": _parse_epoch(data["epoch"])}
    for name in _STRING_FIELDS:
        value = data[name]
        if not isinstance(value, str):
            raise CodecError(f"{name} must be a string")
        values[name] = value
    for name in _INT_FIELDS:
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise CodecError(f"{name} must be an integer")
        values[name] = value
    for name in _FLOAT_FIELDS:
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CodecError(f"{name} must be a number")
        values[name] = float(value)
    return TLE(**values)


def dumps(tle: TLE, indent: int = 2) -> str:
    return json.dumps(to_dict(tle), indent=indent, sort_keys=True, ensure_ascii=False)


def loads(text: str) -> TLE:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CodecError(f"invalid JSON: {exc}") from exc
    return from_dict(data)


def output_path_for(tle: TLE, destination: PathLike) -> Path:
    """Resolve where ``tle`` should be written.

    A destination ending in ``.json`` is a file path; anything else is a
    directory that receives ``<name>.json``.
    """

    path = Path(destination).expanduser()
    if path.suffix.lower() == ".json":
        return path
    stem = _UNSAFE_PATH_CHARS.sub("_", tle.name).strip("_") or tle.catalog_number
    return path / f"{stem}.json"


def write_json(tle: TLE, path: PathLike) -> Path:
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps(tle) + "\n", encoding="utf-8")
    LOGGER.debug("wrote %s to %s", tle.name, target)
    return target


def read_json(path: PathLike) -> TLE:
    return loads(Path(path).expanduser().read_text(encoding="utf-8"))
