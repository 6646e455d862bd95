from pathlib import Path

import pytest

from parse_tle.config import DEFAULT_CELESTRAK_URL, AppConfig, load_config


def test_defaults():
    config = load_config({})
    assert config == AppConfig()
    assert config.celestrak_url == DEFAULT_CELESTRAK_URL
    assert config.output_dir is None


def test_environment_overrides():
    config = load_config(
        {
            "PARSE_TLE_LOG_LEVEL": "debug",
            "PARSE_TLE_LOG_FORMAT": "JSON",
            "PARSE_TLE_CELESTRAK_URL": "http://mirror.local/gp.php",
            "PARSE_TLE_TIMEOUT": "2.5",
            "PARSE_TLE_RETRIES": "0",
            "PARSE_TLE_OUTPUT_DIR": "/tmp/tles",
        }
    )
    assert config.log_level == "DEBUG"
    assert config.log_format == "json"
    assert config.celestrak_url == "http://mirror.local/gp.php"
    assert config.timeout == 2.5
    assert config.retries == 0
    assert config.output_dir == Path("/tmp/tles")


@pytest.mark.parametrize("key, value", [("PARSE_TLE_TIMEOUT", "soon"), ("PARSE_TLE_RETRIES", "-1")])
def test_invalid_numbers_name_the_variable(key, value):
    with pytest.raises(ValueError, match=key):
        load_config({key: value})


def test_invalid_log_format():
    with pytest.raises(ValueError, match="PARSE_TLE_LOG_FORMAT"):
        load_config({"PARSE_TLE_LOG_FORMAT": "xml"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("PARSE_TLE_TIMEOUT", "7")
    assert load_config().timeout == 7.0
