"""Bad dependency rule feed retrieval."""

from __future__ import annotations

from pathlib import Path

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from ..errors import FeedError, FeedMalformed, FeedUnavailable

DEFAULT_RULES_URL = (
    "https://raw.githubusercontent.com/interopio/"
    "javascript-check-dependencies-action/refs/heads/master/bad-deps.json"
)

USER_AGENT = "javascript-check-dependencies (+https://github.com/interopio)"

__all__ = [
    "DEFAULT_RULES_URL",
    "FeedError",
    "FeedMalformed",
    "FeedUnavailable",
    "fetch_rule_feed",
    "is_url",
    "load_rule_source",
    "read_rule_file",
]


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=30)


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def fetch_rule_feed(url: str = DEFAULT_RULES_URL) -> bytes:
    """Return the raw rule feed body served at ``url``."""

    try:
        response = _http_get(url)
    except requests.RequestException as exc:
        raise FeedUnavailable(f"Failed to fetch bad dependency rules: {exc}") from exc

    if not response.ok:
        raise FeedUnavailable(
            "Failed to fetch bad dependency rules: "
            f"{response.status_code} {response.reason}"
        )

    return response.content


def read_rule_file(path: Path) -> bytes:
    """Return the raw rule feed stored in a local file."""

    try:
        return path.read_bytes()
    except OSError as exc:
        raise FeedUnavailable(f"Failed to read bad dependency rules from {path}: {exc}") from exc


def load_rule_source(source: str) -> bytes:
    """Fetch the raw rule feed from a URL or a filesystem path."""
    if is_url(source):
        return fetch_rule_feed(source)
    return read_rule_file(Path(source))
