"""Utilities for retrieving the bad dependency rule feed."""

from .rule_feed import (
    DEFAULT_RULES_URL,
    FeedError,
    FeedMalformed,
    FeedUnavailable,
    fetch_rule_feed,
    load_rule_source,
    read_rule_file,
)

__all__ = [
    "DEFAULT_RULES_URL",
    "FeedError",
    "FeedMalformed",
    "FeedUnavailable",
    "fetch_rule_feed",
    "load_rule_source",
    "read_rule_file",
]
