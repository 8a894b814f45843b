"""Walk npm package-lock.json documents looking for bad dependency versions.

A single depth-first walk covers npm v1 (nested "dependencies" tree) and v2+
(flat "packages" map keyed by ``node_modules/...`` paths), since it does not
assume any particular document shape.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Any

from ..matcher import match_bad_rules
from ..models import ROOT_LOCATION, Finding
from ..rules import RuleSet


class InvalidLockfile(ValueError):
    """Raised when a lockfile cannot be read as JSON."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class JsonKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any) -> JsonKind:
    """Return the JSON kind of a decoded value."""
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Unsupported JSON value of type {type(value).__name__}")


_CONTAINERS = {JsonKind.ARRAY, JsonKind.OBJECT}


def normalise_package_key(raw_key: str) -> str:
    """Reduce a lockfile key to the package name it refers to.

    The last path segment is kept, together with an immediately preceding
    ``@scope`` segment::

        node_modules/@acme/bad                 -> @acme/bad
        node_modules/foo                       -> foo
        node_modules/a/node_modules/@scope/b   -> @scope/b

    Keys ending in a separator are returned unchanged.
    """
    segments = raw_key.split("/")
    name = segments[-1]
    if not name:
        return raw_key
    if len(segments) > 1:
        scope = segments[-2]
        if scope.startswith("@") and len(scope) > 1:
            return f"{scope}/{name}"
    return name


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _children(node: Any, kind: JsonKind) -> Iterator[tuple[str, Any]]:
    if kind is JsonKind.OBJECT:
        for key, value in node.items():
            yield str(key), value
    elif kind is JsonKind.ARRAY:
        for index, value in enumerate(node):
            yield str(index), value


def scan_package_lock(document: Any, file: str, rules: RuleSet) -> list[Finding]:
    """Return every occurrence in ``document`` that matches ``rules``.

    Findings are ordered by discovery: a node's own name/version first, then
    each keyed child followed by whatever is found below that child.
    """
    findings: list[Finding] = []

    def emit(location: str, name: str, version: str, matched: list[str]) -> None:
        findings.append(
            Finding(
                file=file,
                location=location or ROOT_LOCATION,
                name=name,
                version=version,
                matched_ranges=tuple(matched),
            )
        )

    # (path, remaining children) per open container; an explicit stack keeps
    # arbitrarily deep documents off the interpreter's call stack
    stack: list[tuple[str, Iterator[tuple[str, Any]]]] = []

    def enter(node: Any, kind: JsonKind, path: str) -> None:
        # The node itself describes a package
        if kind is JsonKind.OBJECT and node.get("name") and node.get("version"):
            matched = match_bad_rules(node["name"], node["version"], rules)
            if matched:
                emit(path, node["name"], node["version"], matched)
        stack.append((path, _children(node, kind)))

    root_kind = classify(document)
    if root_kind in _CONTAINERS:
        enter(document, root_kind, "")

    while stack:
        path, children = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            continue

        raw_key, value = entry
        child_kind = classify(value)
        if child_kind not in _CONTAINERS:
            continue

        key = normalise_package_key(raw_key)

        # "dependencies"/"packages" style maps: {"pkg": {"version": ...}}
        if key in rules and child_kind is JsonKind.OBJECT and value.get("version"):
            matched = match_bad_rules(key, value["version"], rules)
            if matched:
                emit(_join(path, key), key, value["version"], matched)

        enter(value, child_kind, _join(path, key))

    return findings


def load_package_lock(path: Path) -> Any:
    """Read and decode a lockfile.

    Raises:
        InvalidLockfile: if the file is not valid UTF-8 JSON, or is nested
            too deeply to decode.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidLockfile(path, str(exc)) from exc
    except RecursionError as exc:
        raise InvalidLockfile(path, f"nesting too deep to decode ({exc})") from exc
