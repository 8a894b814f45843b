"""Core scanning entrypoints.

This module MUST NOT contain GitHub-specific dependencies so it can be used by
both the Action wrapper and the standalone CLI. Diagnostics go through the
injected sink and findings through the injected reporter.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .config import Settings
from .diagnostics import DiagnosticSink
from .discovery import discover_lockfiles
from .ingestion.rule_feed import load_rule_source
from .models import Finding
from .parsers.package_lock import InvalidLockfile, load_package_lock, scan_package_lock
from .report import FindingReport, aggregate
from .reporting import Reporter
from .rules import RuleSet, parse_rule_payload


class RunOutcome(Enum):
    NOTHING_TO_CHECK = "nothing-to-check"
    CLEAN = "clean"
    FINDINGS = "findings"


@dataclass
class RunResult:
    outcome: RunOutcome
    report: FindingReport = field(default_factory=FindingReport)

    @property
    def failed(self) -> bool:
        return self.outcome is RunOutcome.FINDINGS


def scan_documents(documents: Iterable[tuple[str, Any]], rules: RuleSet) -> FindingReport:
    """Scan already-parsed lockfiles given as ``(file, document)`` pairs."""
    return aggregate(
        (file, scan_package_lock(document, file, rules)) for file, document in documents
    )


def _display_path(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return str(path)


def scan_files(
    paths: Iterable[Path],
    rules: RuleSet,
    sink: DiagnosticSink,
    root: Path | None = None,
) -> FindingReport:
    """Read and scan lockfiles, skipping the ones that cannot be decoded."""
    report = FindingReport()
    for path in paths:
        file = _display_path(path, root)
        try:
            document = load_package_lock(path)
        except InvalidLockfile as exc:
            sink.warning(f"Skipping {file}: invalid JSON ({exc.message})")
            report.skip_file(file)
            continue
        except OSError as exc:
            sink.warning(f"Skipping {file}: cannot be read ({exc})")
            report.skip_file(file)
            continue

        findings: list[Finding] = scan_package_lock(document, file, rules)
        report.add_file(file, findings)
    return report


def load_rules(source: str, sink: DiagnosticSink) -> RuleSet:
    """Fetch and normalise the rule feed.

    Raises:
        FeedUnavailable: if the feed cannot be retrieved.
        FeedMalformed: if the feed is not a JSON array.
    """
    sink.info(f"Loading bad dependency rules from {source}...")
    return parse_rule_payload(load_rule_source(source), sink, source)


def run_check(settings: Settings, sink: DiagnosticSink, reporter: Reporter) -> RunResult:
    """Run a full check: load rules, discover lockfiles, scan and report.

    Feed errors propagate to the caller; per-file problems are reported as
    warnings and the run carries on.
    """
    rules = load_rules(settings.rules_url, sink)
    if not rules:
        sink.warning("No bad dependency rules loaded - nothing to check.")
        return RunResult(RunOutcome.NOTHING_TO_CHECK)

    root = settings.root.resolve()
    files = discover_lockfiles(root, settings.lockfile_names)
    if not files:
        sink.info("No package-lock.json files found. Nothing to check.")
        return RunResult(RunOutcome.NOTHING_TO_CHECK)

    sink.info(f"Found {len(files)} package-lock.json file(s). Scanning...")

    report = scan_files(files, rules, sink, root=root)

    reporter.report(report.findings)
    reporter.summarize(report.total, settings.rules_url)

    outcome = RunOutcome.FINDINGS if report.has_findings else RunOutcome.CLEAN
    return RunResult(outcome, report)
