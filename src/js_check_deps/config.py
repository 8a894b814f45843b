"""Run configuration resolved from arguments and the environment.

Values are taken, in order of priority, from explicit arguments, GitHub
Action inputs (``INPUT_*`` variables), ``JAVASCRIPT_CHECK_DEPENDENCIES_*``
variables and finally built-in defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .diagnostics import in_github_actions
from .discovery import LOCKFILE_NAMES
from .ingestion.rule_feed import DEFAULT_RULES_URL

RULES_URL_ENV_VAR = "JAVASCRIPT_CHECK_DEPENDENCIES_RULES_URL"
WARN_ONLY_ENV_VAR = "JAVASCRIPT_CHECK_DEPENDENCIES_WARN_ONLY"
RULES_URL_INPUT = "INPUT_RULES_URL"
WARN_ONLY_INPUT = "INPUT_WARN_ONLY"

_TRUTHY = {"1", "true", "yes", "y"}


class ConfigError(RuntimeError):
    """Raised when the run configuration is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved settings for one scan run."""

    rules_url: str
    root: Path
    lockfile_names: tuple[str, ...] = LOCKFILE_NAMES
    warn_only: bool = False
    github_actions: bool = False
    step_summary_path: Path | None = None


def _is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _first_set(environ: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = environ.get(name, "").strip()
        if value:
            return value
    return None


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    rules_url: str | None = None,
    root: Path | str | None = None,
    warn_only: bool | None = None,
) -> Settings:
    """Resolve settings for a run.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.
        rules_url: Rules URL or file path overriding the environment.
        root: Directory to scan; falls back to GITHUB_WORKSPACE, then ".".
        warn_only: Report findings without failing the run.

    Raises:
        ConfigError: If the rules source is empty or the root is not a directory.
    """
    env = os.environ if environ is None else environ

    if rules_url is None:
        rules_url = _first_set(env, RULES_URL_INPUT, RULES_URL_ENV_VAR) or DEFAULT_RULES_URL
    rules_url = rules_url.strip()
    if not rules_url:
        raise ConfigError("Rules URL must be a non-empty URL or file path")

    if root is None:
        root = _first_set(env, "GITHUB_WORKSPACE") or "."
    root_path = Path(root)
    if not root_path.is_dir():
        raise ConfigError(f"Scan root is not a directory: {root_path}")

    if warn_only is None:
        warn_only = _is_truthy(env.get(WARN_ONLY_INPUT)) or _is_truthy(env.get(WARN_ONLY_ENV_VAR))

    summary = _first_set(env, "GITHUB_STEP_SUMMARY")

    return Settings(
        rules_url=rules_url,
        root=root_path,
        warn_only=warn_only,
        github_actions=in_github_actions(env),
        step_summary_path=Path(summary) if summary else None,
    )
