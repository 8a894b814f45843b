#!/usr/bin/env python3
"""GitHub Action entrypoint.

Usage:
  python scripts/scan.py [--root .] [--rules path_or_url] [--warn-only]

Action inputs arrive as INPUT_* environment variables and are picked up by
the same configuration layer the standalone CLI uses.
"""

from __future__ import annotations

from js_check_deps.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
