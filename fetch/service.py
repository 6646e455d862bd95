"""Query the element-set service and decode every returned record."""
from __future__ import annotations

import dataclasses
from typing import List, Protocol

from parse_tle.logging import get_logger, log_context
from parse_tle.parser import BatchItem, parse_many
from parse_tle.record import TLE

LOGGER = get_logger("fetch.service")


class ElementSource(Protocol):
    def fetch(self, query: str, value: str) -> str:
        ...


@dataclasses.dataclass
class QueryResult:
    query: str
    value: str
    items: List[BatchItem] = dataclasses.field(default_factory=list)

    @property
    def records(self) -> List[TLE]:
        return [item.record for item in self.items if item.record is not None]

    @property
    def failures(self) -> List[BatchItem]:
        return [item for item in self.items if not item.ok]


def query_elements(source: ElementSource, query: str, value: str, verbose: bool = False) -> QueryResult:
    """Fetch ``query=value`` from ``source`` and parse each block.

    Network errors propagate as :class:`fetch.sources.SourceError`; blocks
    that fail to decode are reported in :attr:`QueryResult.failures`.
    """

    with log_context(query=query, value=value):
        text = source.fetch(query, value)
        items = parse_many(text)
        result = QueryResult(query=query, value=value, items=items)
        if verbose:
            LOGGER.info(
                "%s=%s returned %d record(s), %d failed",
                query,
                value,
                len(result.records),
                len(result.failures),
            )
        return result


__all__ = ["ElementSource", "QueryResult", "query_elements"]
