from pathlib import Path

import pytest

from js_check_deps.config import ConfigError, load_settings
from js_check_deps.discovery import LOCKFILE_NAMES
from js_check_deps.ingestion import DEFAULT_RULES_URL


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings({}, root=tmp_path)
    assert settings.rules_url == DEFAULT_RULES_URL
    assert settings.root == tmp_path
    assert settings.lockfile_names == LOCKFILE_NAMES
    assert settings.warn_only is False
    assert settings.github_actions is False
    assert settings.step_summary_path is None


def test_rules_url_priority(tmp_path: Path) -> None:
    env = {
        "INPUT_RULES_URL": "https://input.example.test/rules.json",
        "JAVASCRIPT_CHECK_DEPENDENCIES_RULES_URL": "https://env.example.test/rules.json",
    }
    assert load_settings(env, root=tmp_path).rules_url == "https://input.example.test/rules.json"

    env["INPUT_RULES_URL"] = "  "
    assert load_settings(env, root=tmp_path).rules_url == "https://env.example.test/rules.json"

    explicit = load_settings(env, root=tmp_path, rules_url="rules/bad-deps.json")
    assert explicit.rules_url == "rules/bad-deps.json"


@pytest.mark.parametrize("value, expected", [("true", True), ("YES", True), ("1", True), ("0", False), ("", False)])
def test_warn_only_from_environment(tmp_path: Path, value: str, expected: bool) -> None:
    env = {"JAVASCRIPT_CHECK_DEPENDENCIES_WARN_ONLY": value}
    assert load_settings(env, root=tmp_path).warn_only is expected


def test_explicit_warn_only_wins(tmp_path: Path) -> None:
    env = {"INPUT_WARN_ONLY": "true"}
    assert load_settings(env, root=tmp_path, warn_only=False).warn_only is False


def test_github_actions_environment(tmp_path: Path) -> None:
    summary = tmp_path / "summary.md"
    env = {
        "GITHUB_RUN_ID": "42",
        "CI": "true",
        "GITHUB_WORKSPACE": str(tmp_path),
        "GITHUB_STEP_SUMMARY": str(summary),
    }
    settings = load_settings(env)
    assert settings.github_actions is True
    assert settings.root == tmp_path
    assert settings.step_summary_path == summary


def test_github_actions_needs_ci_flag(tmp_path: Path) -> None:
    assert load_settings({"GITHUB_RUN_ID": "42"}, root=tmp_path).github_actions is False


def test_root_must_be_a_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not a directory"):
        load_settings({}, root=tmp_path / "missing")


def test_blank_rules_url_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="non-empty"):
        load_settings({}, root=tmp_path, rules_url="   ")
