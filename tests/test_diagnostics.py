import io
import logging

from js_check_deps.diagnostics import (
    GitHubActionsSink,
    LoggingSink,
    RecordingSink,
    in_github_actions,
    sink_for_environment,
)


def test_github_sink_writes_workflow_commands() -> None:
    stream = io.StringIO()
    sink = GitHubActionsSink(stream)

    sink.info("plain")
    sink.warning("Skipping a: invalid JSON (50% done)")
    sink.start_group("Compromised dependencies found")
    sink.error("File: a\nLocation: b\r\n")
    sink.end_group()

    assert stream.getvalue().splitlines() == [
        "plain",
        "::warning::Skipping a: invalid JSON (50%25 done)",
        "::group::Compromised dependencies found",
        "::error::File: a%0ALocation: b%0D%0A",
        "::endgroup::",
    ]


def test_github_sink_keeps_info_on_a_single_line() -> None:
    stream = io.StringIO()
    sink = GitHubActionsSink(stream)

    sink.info("Loading bad dependency rules from ./rules\n::error::forged.json...")
    sink.info("Loaded rules for 1 package(s): evil\r\n::warning::x...")

    assert stream.getvalue().splitlines() == [
        "Loading bad dependency rules from ./rules%0A::error::forged.json...",
        "Loaded rules for 1 package(s): evil%0D%0A::warning::x...",
    ]


def test_logging_sink_uses_levels(caplog) -> None:
    logger = logging.getLogger("tests.diagnostics")
    sink = LoggingSink(logger)

    with caplog.at_level(logging.INFO, logger="tests.diagnostics"):
        sink.info("hello")
        sink.warning("careful")
        sink.error("broken")

    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [
        ("INFO", "hello"),
        ("WARNING", "careful"),
        ("ERROR", "broken"),
    ]


def test_recording_sink_filters_by_level() -> None:
    sink = RecordingSink()
    sink.info("a")
    sink.warning("b")
    sink.start_group("g")
    sink.end_group()
    assert sink.messages("info") == ["a"]
    assert sink.messages("warning") == ["b"]
    assert sink.events[-2:] == [("group", "g"), ("endgroup", "")]


def test_environment_detection() -> None:
    assert in_github_actions({"GITHUB_RUN_ID": "1", "CI": "true"})
    assert not in_github_actions({"GITHUB_RUN_ID": "1"})
    assert not in_github_actions({"CI": "true"})
    assert isinstance(sink_for_environment({"GITHUB_RUN_ID": "1", "CI": "1"}), GitHubActionsSink)
    assert isinstance(sink_for_environment({}), LoggingSink)
