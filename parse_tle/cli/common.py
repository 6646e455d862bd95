"""Common helpers for the parse-tle CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .. import codec
from ..config import AppConfig
from ..logging import LOG_FORMATS, configure_logging, get_logger
from ..record import TLE

LOGGER = get_logger("cli")

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def add_shared_arguments(parser: argparse.ArgumentParser, config: AppConfig, nested: bool = False) -> None:
    """Register the logging options.

    The root parser owns the defaults. Sub-commands register the same options
    with ``nested=True`` so they are accepted after the command name without
    overwriting a value given before it.
    """

    def default(value):
        return argparse.SUPPRESS if nested else value

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=default(False),
        help="Verbose logging (same as --log-level DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        default=default(config.log_level if config.log_level in LOG_LEVELS else "INFO"),
        choices=LOG_LEVELS,
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--log-format",
        default=default(config.log_format),
        choices=LOG_FORMATS,
        help="Log line format written to stderr.",
    )


def add_output_arguments(parser: argparse.ArgumentParser, config: AppConfig) -> None:
    parser.add_argument(
        "--output-path",
        "-o",
        default=str(config.output_dir) if config.output_dir else None,
        help="Write each record as JSON. A path ending in .json is used as is, otherwise <path>/<name>.json.",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of the labelled listing.")


def setup_logging(ns: argparse.Namespace) -> logging.Logger:
    level = "DEBUG" if ns.verbose else ns.log_level
    return configure_logging(level=level, fmt=ns.log_format, force=True)


def emit_records(ns: argparse.Namespace, records: Iterable[TLE], stream: Optional[object] = None) -> int:
    """Print ``records`` and optionally persist them; return how many were emitted."""

    out = stream or sys.stdout
    count = 0
    for tle in records:
        if ns.json:
            print(codec.dumps(tle), file=out)
        else:
            print(f"\n{tle}", file=out)
        if ns.output_path:
            target = codec.output_path_for(tle, Path(ns.output_path))
            codec.write_json(tle, target)
            if ns.verbose:
                LOGGER.info("wrote %s in JSON format to %s", tle.name, target)
        count += 1
    return count
