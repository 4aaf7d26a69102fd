"""Alternate CLI module path for `python -m lpbridge.cli.main`."""

from __future__ import annotations

import sys

from lpbridge.cli import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
