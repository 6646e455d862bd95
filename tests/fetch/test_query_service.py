from __future__ import annotations

import pytest

from fetch.service import query_elements
from fetch.sources import SourceError
from parse_tle.errors import ChecksumMismatch

LINE1 = "1 57320U 23098A   23208.62000000  .00000392  00000+0  00000+0 0  9994"
LINE2 = "2 57320  21.3360   6.1160 9054012 182.9630  18.4770  0.46841359   195"
ISS_LINE1 = "1 25544U 98067A   20344.91719907  .00001264  00000-0  29621-4 0  9993"
ISS_LINE2 = "2 25544  51.6466 223.8666 0002416  90.3778  30.6140 15.48970462256430"


class StubSource:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def fetch(self, query: str, value: str) -> str:
        self.calls.append((query, value))
        if self.error:
            raise self.error
        return self.text


def test_query_collects_records_and_failures() -> None:
    text = "\n".join(
        ["CHANDRAYAAN-3", LINE1, LINE2, "ISS (ZARYA)", ISS_LINE1, ISS_LINE2, "BROKEN", LINE1, LINE2[:-1] + "0"]
    )
    source = StubSource(text=text)
    result = query_elements(source, "GROUP", "stations", verbose=True)
    assert source.calls == [("GROUP", "stations")]
    assert [tle.name for tle in result.records] == ["CHANDRAYAAN-3", "ISS (ZARYA)"]
    assert len(result.failures) == 1
    assert isinstance(result.failures[0].error, ChecksumMismatch)


def test_source_errors_propagate() -> None:
    with pytest.raises(SourceError):
        query_elements(StubSource(error=SourceError("offline")), "CATNR", "25544")
