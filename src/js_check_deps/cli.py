"""Command line entrypoint shared by the GitHub Action and local runs.

Usage:
  js-check-deps [--root .] [--rules path_or_url] [--warn-only] [--json]

Exit codes: 0 when nothing bad was found (or --warn-only is set), 1 when the
rule feed or configuration is unusable, 10 when compromised dependencies were
found.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from .config import ConfigError, load_settings
from .core import RunOutcome, run_check
from .diagnostics import configure_logging, sink_for_environment
from .ingestion.rule_feed import FeedError
from .reporting import SinkReporter
from .summary import append_summary, render_summary

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check package-lock.json files against a list of compromised versions."
    )
    parser.add_argument("--root", type=Path, default=None, help="Directory to scan")
    parser.add_argument(
        "--rules",
        dest="rules_url",
        type=str,
        default=None,
        help="URL or path of the bad dependency rules JSON",
    )
    parser.add_argument(
        "--warn-only",
        action="store_true",
        default=None,
        help="Report findings without failing",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    sink = sink_for_environment(os.environ)

    try:
        settings = load_settings(rules_url=args.rules_url, root=args.root, warn_only=args.warn_only)
        result = run_check(settings, sink, SinkReporter(sink))
    except (ConfigError, FeedError) as exc:
        sink.error(str(exc))
        return EXIT_ERROR

    if args.json:
        print(json.dumps(result.report.to_dict(), indent=2))

    if settings.step_summary_path is not None and result.outcome is not RunOutcome.NOTHING_TO_CHECK:
        try:
            append_summary(
                settings.step_summary_path,
                render_summary(result.report.to_dict(), settings.rules_url),
            )
        except OSError as exc:
            sink.warning(f"Could not write step summary: {exc}")

    if result.failed and not settings.warn_only:
        return EXIT_FINDINGS
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
