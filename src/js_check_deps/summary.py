"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from pathlib import Path
from typing import Any


def render_summary(report: dict[str, Any], source: str) -> str:
    """Return a Markdown string with totals and a table of matched packages."""
    totals = report.get("totals", {})
    findings = report.get("findings", [])

    lines = []
    lines.append("# javascript-check-dependencies Summary")
    lines.append("")
    lines.append(f"Rules: {source}")
    lines.append("")
    lines.append(
        f"Lockfiles scanned: {totals.get('filesScanned', 0)} | "
        f"Skipped: {totals.get('filesSkipped', 0)} | "
        f"Findings: {totals.get('findings', 0)}"
    )
    lines.append("")
    lines.append("| File | Location | Package | Version | Matched ranges |")
    lines.append("| --- | --- | --- | --- | --- |")

    if not findings:
        lines.append("| (all lockfiles) | n/a | No compromised packages | n/a | n/a |")

    for finding in findings:
        ranges = ", ".join(finding.get("matchedRanges", []) or [])
        lines.append(
            f"| {finding.get('file', '')} | {finding.get('location', '')} | "
            f"{finding.get('name', '')} | {finding.get('version', '')} | {ranges} |"
        )

    return "\n".join(lines) + "\n"


def append_summary(path: Path, markdown: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(markdown)
