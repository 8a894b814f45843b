import json
from pathlib import Path

import pytest

from js_check_deps.validators.rule_feed import main, validate_document


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_valid_rules_document() -> None:
    validate_document([["@acme/bad", "1.0.*", "^1.1.2"], ["evil-package", "*"], ["ghost"]])


@pytest.mark.parametrize(
    "document, pointer",
    [
        ({"evil-package": ["*"]}, "<root>"),
        ([[]], "0"),
        ([["evil-package", 5]], "0/1"),
        ([["", "*"]], "0/0"),
        (["evil-package"], "0"),
    ],
)
def test_invalid_rules_documents(document: object, pointer: str) -> None:
    with pytest.raises(ValueError) as excinfo:
        validate_document(document)
    assert f"- {pointer}:" in str(excinfo.value)


def test_main_reports_success(tmp_path: Path, capsys) -> None:
    path = _write_json(tmp_path / "bad-deps.json", [["evil-package", "*"]])
    assert main([str(path)]) == 0
    assert "is valid" in capsys.readouterr().out


def test_main_reports_errors(tmp_path: Path, capsys) -> None:
    path = _write_json(tmp_path / "bad-deps.json", [["evil-package", 5]])
    assert main([str(path)]) == 1
    assert "- 0/1:" in capsys.readouterr().err


def test_main_handles_missing_and_broken_files(tmp_path: Path) -> None:
    assert main([str(tmp_path / "absent.json")]) == 1
    broken = tmp_path / "broken.json"
    broken.write_text("[", encoding="utf-8")
    assert main([str(broken)]) == 1
