"""Normalisation of the bad dependency rule feed.

The feed is a JSON array whose entries look like::

    [
      ["@acme/bad", "1.0.*", "^1.1.2"],
      ["evil-package", "*"]
    ]

and is turned into a mapping of package name -> range patterns::

    {"@acme/bad": ["1.0.*", "^1.1.2"], "evil-package": ["*"]}
"""

from __future__ import annotations

import json
from typing import Any, TypeAlias

from .diagnostics import DiagnosticSink
from .errors import FeedMalformed

RuleSet: TypeAlias = dict[str, list[str]]

FEED_SHAPE_HINT = (
    "JSON must be an array with each entry of the format [package-name,range1,range2...]."
)


def _js_string(value: Any) -> str:
    """Render a decoded JSON value the way JavaScript's ``String()`` would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join("" if item is None else _js_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def normalise_rules(payload: Any, sink: DiagnosticSink) -> RuleSet:
    """Merge feed entries into a RuleSet, preserving encounter order.

    Raises:
        FeedMalformed: if the payload is not a list.
    """
    if not isinstance(payload, list):
        raise FeedMalformed(f"Bad dependency rules: {FEED_SHAPE_HINT}")

    normalised: RuleSet = {}
    for index, entry in enumerate(payload):
        if not isinstance(entry, list):
            sink.warning(
                f"Ignoring rules entry {index}: expected an array of strings, "
                f"got {type(entry).__name__}"
            )
            continue
        if not entry or not isinstance(entry[0], str) or not entry[0]:
            sink.warning(f"Ignoring rules entry {index}: first item must be a package name")
            continue

        name = entry[0]
        normalised.setdefault(name, []).extend(_js_string(pattern) for pattern in entry[1:])

    return normalised


def parse_rule_payload(raw: bytes | str, sink: DiagnosticSink, source: str = "") -> RuleSet:
    """Decode a raw feed body and normalise it."""
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        where = f" at {source}" if source else ""
        raise FeedMalformed(f"Bad dependency rules{where} are not valid JSON: {exc}") from exc

    rules = normalise_rules(payload, sink)

    preview = ",".join(list(rules)[:3])
    sink.info(f"Loaded rules for {len(rules)} package(s): {preview}...")
    return rules
