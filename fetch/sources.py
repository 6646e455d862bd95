"""HTTP client for the CelesTrak GP element-set service."""
from __future__ import annotations

import dataclasses
import random
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Callable, Dict, Optional

from parse_tle.config import DEFAULT_CELESTRAK_URL, DEFAULT_RETRIES, DEFAULT_TIMEOUT, AppConfig
from parse_tle.logging import get_logger

DEFAULT_USER_AGENT = "parse-tle/0.1 (+https://celestrak.org)"
DEFAULT_BACKOFF = 0.8  # seconds, doubled per attempt plus jitter
NO_DATA_MARKER = "No GP data found"

# Query keys understood by the GP endpoint.
QUERY_KEYS: Dict[str, str] = {
    "CATNR": "Catalog number (1 to 9 digits)",
    "INTDES": "International designator (yyyy-nnn), every object of a launch",
    "GROUP": "Named group from the CelesTrak current data page",
    "NAME": "Part of a satellite name",
    "SPECIAL": "Special data sets such as GPZ or GPZ-PLUS",
}

LOGGER = get_logger("fetch.sources")


class SourceError(RuntimeError):
    """Raised when the element-set service fails to deliver TLE text."""


def normalize_query(query: str) -> str:
    key = (query or "").strip().upper()
    if key not in QUERY_KEYS:
        raise SourceError(f"unknown query key {query!r}; expected one of {', '.join(QUERY_KEYS)}")
    return key


@dataclasses.dataclass
class CelestrakClient:
    """Fetches raw TLE text for a query key/value pair.

    Requests are spaced by at least ``rate_limit_seconds`` and retried with
    exponential backoff. ``opener``, ``sleeper`` and ``monotonic`` can be
    replaced in tests to avoid real network IO and delays.
    """

    base_url: str = DEFAULT_CELESTRAK_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    backoff: float = DEFAULT_BACKOFF
    rate_limit_seconds: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    opener: Optional[Callable[[urllib.request.Request, float], bytes]] = None
    monotonic: Callable[[], float] = time.monotonic
    sleeper: Callable[[float], None] = time.sleep

    _last_request: Optional[float] = dataclasses.field(default=None, init=False, repr=False)

    @classmethod
    def from_config(cls, config: AppConfig, **overrides) -> "CelestrakClient":
        options = {"base_url": config.celestrak_url, "timeout": config.timeout, "retries": config.retries}
        options.update(overrides)
        return cls(**options)

    def build_url(self, query: str, value: str) -> str:
        params = urllib.parse.urlencode({normalize_query(query): value.strip(), "FORMAT": "TLE"})
        return f"{self.base_url}?{params}"

    def _build_request(self, url: str) -> urllib.request.Request:
        return urllib.request.Request(url, headers={"User-Agent": self.user_agent}, method="GET")

    def _enforce_rate_limit(self) -> None:
        if self.rate_limit_seconds <= 0:
            return
        now = self.monotonic()
        if self._last_request is not None:
            delay = self.rate_limit_seconds - (now - self._last_request)
            if delay > 0:
                self.sleeper(delay)
                now = self.monotonic()
        self._last_request = now

    def _default_opener(self, request: urllib.request.Request, timeout: float) -> bytes:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            status = getattr(resp, "status", None) or resp.getcode()
            if status != 200:
                raise SourceError(f"celestrak returned HTTP {status}")
            return resp.read()

    def _open(self, request: urllib.request.Request) -> bytes:
        opener = self.opener or self._default_opener
        attempt = 0
        while True:
            self._enforce_rate_limit()
            try:
                return opener(request, self.timeout)
            except (urllib.error.URLError, OSError, SourceError) as exc:
                if attempt >= self.retries:
                    raise SourceError(f"celestrak request failed after {attempt + 1} attempt(s): {exc}") from exc
                delay = (self.backoff * (2**attempt)) + random.uniform(0, 0.125)
                LOGGER.info("celestrak attempt %d failed (%s); retrying in %.2fs", attempt + 1, exc, delay)
                self.sleeper(delay)
                attempt += 1

    def fetch(self, query: str, value: str) -> str:
        """Return the raw TLE text answering ``query=value``."""

        url = self.build_url(query, value)
        LOGGER.debug("GET %s", url)
        payload = self._open(self._build_request(url)).decode("utf-8", errors="replace")
        if not payload.strip() or payload.strip().startswith(NO_DATA_MARKER):
            raise SourceError(f"celestrak has no element sets for {normalize_query(query)}={value}")
        return payload


__all__ = [
    "DEFAULT_BACKOFF",
    "DEFAULT_USER_AGENT",
    "NO_DATA_MARKER",
    "QUERY_KEYS",
    "CelestrakClient",
    "SourceError",
    "normalize_query",
]
