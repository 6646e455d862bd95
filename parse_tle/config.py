"""Application configuration loader for parse-tle."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

__all__ = [
    "DEFAULT_CELESTRAK_URL",
    "AppConfig",
    "load_config",
]

DEFAULT_CELESTRAK_URL = "https://celestrak.org/NORAD/elements/gp.php"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 2


@dataclass(frozen=True)
class AppConfig:
    """Settings derived from ``PARSE_TLE_*`` environment variables."""

    log_level: str = "INFO"
    log_format: str = "text"
    celestrak_url: str = DEFAULT_CELESTRAK_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    output_dir: Optional[Path] = None


def _number(env_map: Mapping[str, str], key: str, default, convert):
    raw = env_map.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = convert(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from environment variables."""

    env_map: Mapping[str, str]
    if env is None:
        env_map = os.environ
    else:
        env_map = env

    log_format = env_map.get("PARSE_TLE_LOG_FORMAT", "text").strip().lower() or "text"
    if log_format not in ("text", "json"):
        raise ValueError(f"PARSE_TLE_LOG_FORMAT must be 'text' or 'json', got {log_format!r}")

    output_raw = env_map.get("PARSE_TLE_OUTPUT_DIR")
    output_dir = Path(output_raw).expanduser() if output_raw else None

    return AppConfig(
        log_level=env_map.get("PARSE_TLE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_format=log_format,
        celestrak_url=env_map.get("PARSE_TLE_CELESTRAK_URL", DEFAULT_CELESTRAK_URL),
        timeout=_number(env_map, "PARSE_TLE_TIMEOUT", DEFAULT_TIMEOUT, float),
        retries=_number(env_map, "PARSE_TLE_RETRIES", DEFAULT_RETRIES, int),
        output_dir=output_dir,
    )
