import json

from fetch.sources import CelestrakClient, SourceError
from parse_tle.cli import main
from parse_tle.config import AppConfig

TLE_TEXT = """ISS (ZARYA)
1 25544U 98067A   24157.20856222  .00006411  00000+0  11842-3 0  9996
2 25544  51.6412 205.1217 0004225 113.2939 306.8174 15.50073703551595
"""


def test_celestrak_query_decodes_response(monkeypatch, capsys):
    calls = []

    def fake_fetch(self, query, value):
        calls.append((query, value, self.timeout))
        return TLE_TEXT

    monkeypatch.setattr(CelestrakClient, "fetch", fake_fetch)
    exit_code = main(["celestrak", "catnr", "25544", "--json"], config=AppConfig(timeout=4.0))
    assert exit_code == 0
    assert calls == [("CATNR", "25544", 4.0)]
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "ISS (ZARYA)"
    assert data["mean_anomaly"] == 306.8174


def test_celestrak_failure_exit_code(monkeypatch, capsys):
    def fake_fetch(self, query, value):
        raise SourceError("celestrak has no element sets for CATNR=99999")

    monkeypatch.setattr(CelestrakClient, "fetch", fake_fetch)
    assert main(["celestrak", "CATNR", "99999"], config=AppConfig()) == 1
    assert "no element sets" in capsys.readouterr().err
