"""Data models for RSS Aggregator."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

AGGREGATED_FEED_TITLE = "RSS Aggregator Feed"
AGGREGATED_FEED_DESCRIPTION = "Aggregated RSS feed"


@dataclass(frozen=True)
class FeedItem:
    """Represents a single normalized RSS/Atom feed item."""

    title: str
    link: str
    description: str
    created: datetime
    content: str | None = None  # None when the source entry has no content
    feed_url: str = ""


@dataclass
class AggregatedFeed:
    """Represents the merged feed written as the run's output."""

    items: list[FeedItem] = field(default_factory=list)
    title: str = AGGREGATED_FEED_TITLE
    description: str = AGGREGATED_FEED_DESCRIPTION
    link: str = ""
    created: datetime = field(default_factory=lambda: datetime.now(UTC))
