"""In-memory representation of a decoded TLE."""

from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Tuple

__all__ = ["TLE"]

_LABELS = (
    ("name", "Name"),
    ("catalog_number", "Catalog Number"),
    ("classification", "Classification"),
    ("international_designator", "International Designator"),
    ("epoch", "Epoch"),
    ("mean_motion_1", "Mean Motion 1st Derivative (rev/day)"),
    ("mean_motion_2", "Mean Motion 2nd Derivative (rev/day^2)"),
    ("radiation_pressure", "Radiation Pressure (B*)"),
    ("ephemeris_type", "Ephemeris Type"),
    ("element_set_number", "Element Set Number"),
    ("inc", "Inclination (deg)"),
    ("raan", "RAAN (deg)"),
    ("eccentricity", "Eccentricity"),
    ("arg_perigee", "Argument of Perigee (deg)"),
    ("mean_anomaly", "Mean Anomaly (deg)"),
    ("mean_motion", "Mean Motion (rev/day)"),
    ("rev_num", "Revolution Number"),
)


@dataclasses.dataclass(frozen=True)
class TLE:
    """A fully decoded two-line element set.

    Instances are produced by :func:`parse_tle.parse` and are immutable;
    use :func:`dataclasses.replace` to derive a modified copy. ``epoch`` is a
    timezone-aware UTC datetime with whole-second resolution.
    """

    name: str
    catalog_number: str
    classification: str
    international_designator: str
    epoch: dt.datetime
    mean_motion_1: float
    mean_motion_2: float
    radiation_pressure: float
    ephemeris_type: int
    element_set_number: int
    inc: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float
    rev_num: int

    @classmethod
    def fields(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def __str__(self) -> str:
        width = max(len(label) for _, label in _LABELS)
        rows = []
        for attr, label in _LABELS:
            value = getattr(self, attr)
            if isinstance(value, dt.datetime):
                value = value.strftime("%Y-%m-%d %H:%M:%S UTC")
            rows.append(f"{label:<{width}} : {value}")
        return "\n".join(rows)
