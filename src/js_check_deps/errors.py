"""Errors raised while loading the bad dependency rule feed."""


class FeedError(RuntimeError):
    """Base error for failures while fetching or parsing the rule feed."""


class FeedUnavailable(FeedError):
    """Raised when the rule feed cannot be retrieved."""


class FeedMalformed(FeedError):
    """Raised when the rule feed is not a JSON array of rule entries."""
