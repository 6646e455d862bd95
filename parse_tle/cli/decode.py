"""``parse-tle decode``: decode TLE text given inline, on stdin or in a file."""

from __future__ import annotations

import argparse
import sys

from ..config import AppConfig
from ..errors import TLEError
from ..parser import parse, parse_file
from . import common

LOGGER = common.LOGGER


def run(ns: argparse.Namespace) -> int:
    if ns.two_line_element is not None:
        text = sys.stdin.read() if ns.two_line_element == "-" else ns.two_line_element
        try:
            tle = parse(text)
        except TLEError as exc:
            LOGGER.error("cannot decode TLE: %s", exc)
            return 1
        common.emit_records(ns, [tle])
        return 0

    if ns.file_path:
        try:
            items = parse_file(ns.file_path)
        except OSError as exc:
            LOGGER.error("cannot read %s: %s", ns.file_path, exc)
            return 2
        common.emit_records(ns, [item.record for item in items if item.record is not None])
        failed = [item for item in items if not item.ok]
        if failed:
            LOGGER.error("%d of %d record(s) in %s failed to decode", len(failed), len(items), ns.file_path)
            return 1
        return 0

    print("\nNo TLE provided!\n\nUse the '-h' flag for help", file=sys.stderr)
    return 2


def configure_parser(subparsers, config: AppConfig) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "decode",
        help="Decode a TLE passed on the command line ('-' for stdin) or every record of a file.",
    )
    parser.add_argument("two_line_element", nargs="?", help="Two or three TLE lines separated by newlines.")
    parser.add_argument("--file-path", "-f", help="Path to a file holding one or more TLE records.")
    common.add_shared_arguments(parser, config, nested=True)
    common.add_output_arguments(parser, config)
    parser.set_defaults(handler=run)
    return parser
