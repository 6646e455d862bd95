"""Command line interface for parse-tle."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from ..config import AppConfig, load_config
from . import celestrak, common, decode


def build_parser(config: Optional[AppConfig] = None) -> argparse.ArgumentParser:
    config = config or load_config()
    parser = argparse.ArgumentParser(
        prog="parse-tle",
        description="Decode NORAD two-line element sets.",
    )
    common.add_shared_arguments(parser, config)
    subparsers = parser.add_subparsers(dest="command")
    decode.configure_parser(subparsers, config)
    celestrak.configure_parser(subparsers, config)
    parser.set_defaults(config=config)
    return parser


def main(argv: Optional[Sequence[str]] = None, config: Optional[AppConfig] = None) -> int:
    parser = build_parser(config)
    ns = parser.parse_args(argv)
    if not hasattr(ns, "handler"):
        parser.print_help()
        return 2
    common.setup_logging(ns)
    return ns.handler(ns)


def entrypoint() -> None:
    sys.exit(main())


__all__ = ["build_parser", "entrypoint", "main"]
