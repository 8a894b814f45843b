"""CLI entrypoint for validating a bad dependency rules file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

RULE_FEED_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bad dependency rules",
    "type": "array",
    "items": {
        "type": "array",
        "minItems": 1,
        "prefixItems": [{"type": "string", "minLength": 1}],
        "items": {"type": "string"},
    },
}


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: Any, schema: dict[str, Any] = RULE_FEED_SCHEMA) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ValueError("\n" + _format_errors(errors))


def validate_rules_file(input_path: Path, schema_path: Path | None = None) -> None:
    schema = _load_json(schema_path) if schema_path else RULE_FEED_SCHEMA
    validate_document(_load_json(input_path), schema)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        type=Path,
        help="Path to the rules JSON file to validate",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=None,
        help="Path to a JSON schema overriding the built-in one",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        validate_rules_file(args.input, args.schema)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: Rules failed validation:{exc}", file=sys.stderr)
        return 1

    print(f"Rules file {args.input} is valid")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
