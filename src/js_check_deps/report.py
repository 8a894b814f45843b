"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .models import Finding


@dataclass
class FindingReport:
    """Findings accumulated over one run, in file order then discovery order.

    No merging is done: the same package/version seen at several locations
    produces several findings.
    """

    findings: list[Finding] = field(default_factory=list)
    files_scanned: list[str] = field(default_factory=list)
    files_skipped: list[str] = field(default_factory=list)

    def add_file(self, file: str, findings: Iterable[Finding]) -> None:
        self.files_scanned.append(file)
        self.findings.extend(findings)

    def skip_file(self, file: str) -> None:
        self.files_skipped.append(file)

    @property
    def total(self) -> int:
        return len(self.findings)

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": "1",
            "hasFindings": self.has_findings,
            "findings": [finding.to_dict() for finding in self.findings],
            "totals": {
                "filesScanned": len(self.files_scanned),
                "filesSkipped": len(self.files_skipped),
                "findings": self.total,
            },
        }


def aggregate(per_file: Iterable[tuple[str, Iterable[Finding]]]) -> FindingReport:
    """Build a report from ``(file, findings)`` pairs in scan order."""
    report = FindingReport()
    for file, findings in per_file:
        report.add_file(file, findings)
    return report
