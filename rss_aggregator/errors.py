"""Exception types for RSS Aggregator."""


class AggregatorError(Exception):
    """Base class for aggregator failures."""


class ConfigError(AggregatorError, ValueError):
    """Raised when the aggregation request or environment is invalid."""


class FetchError(AggregatorError):
    """Raised when a single feed cannot be downloaded or parsed."""

    def __init__(self, feed_url: str, message: str):
        super().__init__(f"failed to fetch feed {feed_url}: {message}")
        self.feed_url = feed_url
        self.reason = message


class SerializationError(AggregatorError):
    """Raised when the aggregated feed cannot be rendered as RSS XML."""
