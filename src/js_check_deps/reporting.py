"""Reporters turning structured findings into CI output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .diagnostics import DiagnosticSink
from .models import Finding

FINDINGS_GROUP_TITLE = "Compromised dependencies found"


class Reporter(Protocol):
    """Receives the findings of a run and its final tally."""

    def report(self, findings: Sequence[Finding]) -> None: ...

    def summarize(self, count: int, source: str) -> None: ...


def summary_message(count: int, source: str) -> str:
    if count:
        return (
            f"Detected {count} occurrence(s) of dependencies matching the bad rules from {source}."
        )
    return f"No compromised dependencies found using rules from {source}."


class SinkReporter:
    """Write findings to a diagnostic sink, one error block per finding."""

    def __init__(self, sink: DiagnosticSink) -> None:
        self.sink = sink

    def report(self, findings: Sequence[Finding]) -> None:
        if not findings:
            return
        self.sink.start_group(FINDINGS_GROUP_TITLE)
        for finding in findings:
            self.sink.error(finding.describe())
        self.sink.end_group()

    def summarize(self, count: int, source: str) -> None:
        message = summary_message(count, source)
        if count:
            self.sink.error(message)
        else:
            self.sink.info(message)
