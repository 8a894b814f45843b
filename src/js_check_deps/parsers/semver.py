"""npm-style semver range handling built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- X-ranges and partials: "*", "x", "1.x", "1.0.*", "1", "1.2"
- caret ranges ^x.y.z → >=x.y.z <x+1.0.0 (0.x and 0.0.x narrow the range)
- tilde ranges ~x.y.z → >=x.y.z <x.y+1.0
- hyphen ranges "1.2.3 - 2.3.4"
- comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- alternatives joined with "||"

Versions handed to ``satisfies`` are release versions as produced by
``coerce``, so pre-release bounds compare by their release triple: the
pre-release inclusive behaviour of npm reduces to that for release versions.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

_COERCE = re.compile(r"(?:^|[^\d])(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|[^\d])")

_PARTIAL = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*])"
    r"(?:\.(?P<patch>\d+|[xX*])"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?)?)?$"
)

_COMPARATOR = re.compile(r"^(?P<op><=|>=|<|>|=|~>|~|\^)?(?P<version>.*)$")
_OPERATOR_SPACE = re.compile(r"(<=|>=|<|>|=|~>|~|\^)\s+")
_HYPHEN = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")

# (operator, bound, bound_is_prerelease)
_Bound = tuple[str, Version, bool]

_NEVER: list[_Bound] = [("<", Version("0.0.0"), False)]


class InvalidRange(ValueError):
    """Raised when a range expression cannot be parsed."""


def _parse_version(v: str) -> Version:
    return Version(v)


def _version(major: int, minor: int = 0, patch: int = 0) -> Version:
    return Version(f"{major}.{minor}.{patch}")


def _next_major(v: Version) -> Version:
    return Version(f"{v.major + 1}.0.0")


def _next_minor(v: Version) -> Version:
    return Version(f"{v.major}.{v.minor + 1}.0")


def _next_patch(v: Version) -> Version:
    return Version(f"{v.major}.{v.minor}.{v.micro + 1}")


def coerce(value: str) -> Version | None:
    """Extract the first ``MAJOR[.MINOR[.PATCH]]`` run from an arbitrary string.

    Missing components default to zero and anything around the digits
    (leading ``v``, pre-release tags, build metadata) is dropped. Returns
    ``None`` when no digit run is present.
    """
    match = _COERCE.search(value)
    if match is None:
        return None
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return _version(major, minor, patch)


def _release(v: Version) -> Version:
    parts = (tuple(v.release) + (0, 0, 0))[:3]
    return _version(*parts)


def _parse_partial(text: str) -> tuple[int | None, int | None, int | None, str | None]:
    match = _PARTIAL.match(text.strip())
    if match is None:
        raise InvalidRange(f"invalid version '{text}'")

    numbers: list[int | None] = []
    wildcard = False
    for group in ("major", "minor", "patch"):
        raw = match.group(group)
        if raw is None or raw in {"x", "X", "*"} or wildcard:
            wildcard = True
            numbers.append(None)
        else:
            numbers.append(int(raw))

    pre = match.group("pre") if numbers[2] is not None else None
    return numbers[0], numbers[1], numbers[2], pre


def _desugar(op: str, text: str) -> list[_Bound]:
    """Translate one comparator into plain (operator, bound) pairs."""
    if not text.strip():
        text = "*"
    major, minor, patch, pre = _parse_partial(text)
    has_pre = pre is not None

    if major is None:
        if op in {"<", ">"}:
            return list(_NEVER)
        return []

    base = _version(major, minor or 0, patch or 0)

    if op in {"", "="}:
        if minor is None:
            return [(">=", base, False), ("<", _next_major(base), False)]
        if patch is None:
            return [(">=", base, False), ("<", _next_minor(base), False)]
        return [("=", base, has_pre)]

    if op in {"~", "~>"}:
        upper = _next_major(base) if minor is None else _next_minor(base)
        return [(">=", base, has_pre), ("<", upper, False)]

    if op == "^":
        if minor is None or major > 0:
            upper = _next_major(base)
        elif patch is None or minor > 0:
            upper = _next_minor(base)
        else:
            upper = _next_patch(base)
        return [(">=", base, has_pre), ("<", upper, False)]

    if op == ">":
        if minor is None:
            return [(">=", _next_major(base), False)]
        if patch is None:
            return [(">=", _next_minor(base), False)]
        return [(">", base, has_pre)]

    if op == ">=":
        return [(">=", base, has_pre)]

    if op == "<":
        return [("<", base, has_pre)]

    if op == "<=":
        if minor is None:
            return [("<", _next_major(base), False)]
        if patch is None:
            return [("<", _next_minor(base), False)]
        return [("<=", base, has_pre)]

    raise InvalidRange(f"unsupported operator '{op}'")


def _hyphen(low: str, high: str) -> list[_Bound]:
    bounds: list[_Bound] = []

    major, minor, patch, pre = _parse_partial(low)
    if major is not None:
        bounds.append((">=", _version(major, minor or 0, patch or 0), pre is not None))

    major, minor, patch, pre = _parse_partial(high)
    if major is not None:
        top = _version(major, minor or 0, patch or 0)
        if minor is None:
            bounds.append(("<", _next_major(top), False))
        elif patch is None:
            bounds.append(("<", _next_minor(top), False))
        else:
            bounds.append(("<=", top, pre is not None))

    return bounds


def _parse_set(expr: str) -> list[_Bound]:
    expr = _OPERATOR_SPACE.sub(r"\1", expr.strip())

    hyphen = _HYPHEN.match(expr)
    if hyphen:
        return _hyphen(hyphen.group("low"), hyphen.group("high"))

    bounds: list[_Bound] = []
    for token in expr.split():
        comparator = _COMPARATOR.match(token)
        if comparator is None:
            raise InvalidRange(f"invalid comparator '{token}'")
        bounds.extend(_desugar(comparator.group("op") or "", comparator.group("version")))
    return bounds


def parse_range(expr: str) -> list[list[_Bound]]:
    """Parse a range into alternatives of comparator bounds.

    Raises:
        InvalidRange: if any part of the expression is not a valid range.
    """
    return [_parse_set(part) for part in expr.split("||")]


def _check(v: Version, op: str, bound: Version, pre: bool) -> bool:
    # For a release version, X-pre sits between the previous release and X.
    if op == ">=":
        return v >= bound
    if op == ">":
        return v >= bound if pre else v > bound
    if op == "<":
        return v < bound
    if op == "<=":
        return v < bound if pre else v <= bound
    if op == "=":
        return False if pre else v == bound
    return False


def satisfies(installed: str | Version, expr: str) -> bool:
    """Return True if ``installed`` falls inside the npm range ``expr``.

    An unparseable version or range never matches.
    """
    try:
        v = installed if isinstance(installed, Version) else _parse_version(installed)
        alternatives = parse_range(expr)
    except (InvalidVersion, InvalidRange):
        return False

    v = _release(v)
    return any(
        all(_check(v, op, bound, pre) for op, bound, pre in bounds) for bounds in alternatives
    )
