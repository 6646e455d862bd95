"""``parse-tle celestrak``: query CelesTrak and decode the answer."""

from __future__ import annotations

import argparse

from fetch.service import query_elements
from fetch.sources import QUERY_KEYS, CelestrakClient, SourceError

from ..config import AppConfig
from . import common

LOGGER = common.LOGGER


def _query_help() -> str:
    return "; ".join(f"{key}: {text}" for key, text in QUERY_KEYS.items())


def run(ns: argparse.Namespace) -> int:
    client = CelestrakClient.from_config(ns.config)
    try:
        result = query_elements(client, ns.query, ns.value, verbose=ns.verbose)
    except SourceError as exc:
        LOGGER.error("celestrak query failed: %s", exc)
        return 1
    common.emit_records(ns, result.records)
    return 1 if result.failures else 0


def configure_parser(subparsers, config: AppConfig) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("celestrak", help="Query CelesTrak for TLEs and decode them.")
    parser.add_argument("query", type=str.upper, choices=sorted(QUERY_KEYS), help=_query_help())
    parser.add_argument("value", help="Value for the query key, e.g. 25544 or 2023-098.")
    common.add_shared_arguments(parser, config, nested=True)
    common.add_output_arguments(parser, config)
    parser.set_defaults(handler=run)
    return parser
