"""Retrieval of raw TLE text from the CelesTrak element-set service."""

from .service import QueryResult, query_elements
from .sources import QUERY_KEYS, CelestrakClient, SourceError

__all__ = ["CelestrakClient", "QUERY_KEYS", "QueryResult", "SourceError", "query_elements"]
