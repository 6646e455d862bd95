"""CLI entry point exposed via ``python -m parse_tle``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
