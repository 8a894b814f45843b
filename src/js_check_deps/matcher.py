"""Match a concrete package version against bad dependency rules."""

from __future__ import annotations

from typing import Any

from .parsers.semver import coerce, satisfies
from .rules import RuleSet

WILDCARD = "*"


def match_bad_rules(name: Any, version: Any, rules: RuleSet) -> list[str] | None:
    """Return every range of ``name`` that ``version`` falls into, or None.

    Versions are coerced first, so ``1.1.2-beta.1`` is checked as ``1.1.2``.
    When coercion fails only a wildcard rule can match, and the result is
    then ``["*"]``.
    """
    if not isinstance(name, str):
        return None
    patterns = rules.get(name)
    if not patterns:
        return None

    if not isinstance(version, str) or not version:
        return None

    coerced = coerce(version)
    if coerced is None:
        has_wildcard = any(pattern.strip() == WILDCARD for pattern in patterns)
        return [WILDCARD] if has_wildcard else None

    matched = [
        pattern
        for pattern in patterns
        if pattern.strip() == WILDCARD or satisfies(coerced, pattern.strip())
    ]
    return matched or None
