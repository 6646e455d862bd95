import importlib


def test_importable() -> None:
    module = importlib.import_module("parse_tle")
    assert hasattr(module, "parse")
    assert hasattr(module, "TLE")
    assert importlib.import_module("fetch").CelestrakClient
