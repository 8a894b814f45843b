"""Diagnostic sinks used by the scanning core.

The core never logs or talks to the CI environment directly: every
diagnostic event goes through a ``DiagnosticSink`` handed in by the caller.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Protocol, TextIO

LOGGER_NAME = "js_check_deps"


class DiagnosticSink(Protocol):
    """Structural protocol for diagnostic event consumers."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def start_group(self, title: str) -> None: ...

    def end_group(self) -> None: ...


class LoggingSink:
    """Route diagnostics to the standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def start_group(self, title: str) -> None:
        self.logger.info("===============")
        self.logger.info(title)
        self.logger.info("===============")

    def end_group(self) -> None:
        self.logger.info("===============")


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsSink:
    """Emit GitHub workflow commands so events show up as annotations."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def _write(self, line: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def info(self, message: str) -> None:
        self._write(_escape_data(message))

    def warning(self, message: str) -> None:
        self._write(f"::warning::{_escape_data(message)}")

    def error(self, message: str) -> None:
        self._write(f"::error::{_escape_data(message)}")

    def start_group(self, title: str) -> None:
        self._write(f"::group::{_escape_data(title)}")

    def end_group(self) -> None:
        self._write("::endgroup::")


class RecordingSink:
    """Keep diagnostic events in memory as ``(level, message)`` pairs."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def start_group(self, title: str) -> None:
        self.events.append(("group", title))

    def end_group(self) -> None:
        self.events.append(("endgroup", ""))

    def messages(self, level: str) -> list[str]:
        return [message for event_level, message in self.events if event_level == level]


def in_github_actions(environ: Mapping[str, str]) -> bool:
    """Return True when running inside a GitHub Actions job."""
    return bool(environ.get("GITHUB_RUN_ID")) and bool(environ.get("CI"))


def sink_for_environment(environ: Mapping[str, str]) -> DiagnosticSink:
    if in_github_actions(environ):
        return GitHubActionsSink()
    return LoggingSink()


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger for CLI runs."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
