"""RSS Feed Processing module for RSS Aggregator."""

import time
from datetime import UTC, datetime

import feedparser
import requests
from dateutil import parser as date_parser

from .errors import FetchError
from .logging_config import create_execution_logger
from .models import FeedItem

# Zone names dateutil does not resolve on its own; offsets in seconds.
US_TZINFOS = {
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
}


class FeedProcessor:
    """Downloads RSS/Atom feeds and normalizes their entries."""

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = "RSS-Aggregator/1.0",
        execution_id: str | None = None,
    ):
        """Initialize FeedProcessor with configuration.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header sent with every request
            execution_id: Execution ID for logging context
        """
        self.timeout = timeout
        self.logger = create_execution_logger("feed_processor", execution_id)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

        self.logger.debug("FeedProcessor initialized", timeout=timeout)

    def fetch(self, feed_url: str) -> list[FeedItem]:
        """Download and parse a single RSS/Atom feed.

        Args:
            feed_url: URL of the RSS/Atom feed

        Returns:
            List of FeedItem objects from the feed

        Raises:
            FetchError: If the download fails or the body is not a usable feed
        """
        self.logger.info("Downloading feed content", feed_url=feed_url)
        try:
            response = self.session.get(feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(feed_url, str(e)) from e

        self.logger.debug(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
            content_length=len(response.content),
        )

        fetched_at = datetime.now(UTC)
        entries = self.parse_entries(response.content, feed_url)

        items = []
        for entry in entries:
            try:
                items.append(self.normalize_item(entry, feed_url, fetched_at))
            except (AttributeError, TypeError, ValueError) as e:
                self.logger.warning(
                    f"Failed to normalize entry from {feed_url}: {e}",
                    feed_url=feed_url,
                    error=str(e),
                )

        self.logger.log_feed_processing(feed_url, len(items))
        return items

    def parse_entries(self, content: bytes, feed_url: str = "") -> list:
        """Parse raw feed bytes into feedparser entries.

        Args:
            content: Raw response body
            feed_url: Source URL, used for error reporting

        Returns:
            List of raw feedparser entries

        Raises:
            FetchError: If the content is not RSS/Atom, or is malformed
                and yielded no entries
        """
        feed = feedparser.parse(content)
        bozo_exception = getattr(feed, "bozo_exception", None)

        if not feed.get("version"):
            reason = "content is not a RSS/Atom feed"
            if bozo_exception is not None:
                reason = f"{reason} ({bozo_exception})"
            raise FetchError(feed_url, reason)

        if feed.get("bozo"):
            if not feed.entries:
                raise FetchError(feed_url, f"malformed feed: {bozo_exception}")
            self.logger.warning(
                f"Feed parsing warning for {feed_url}: {bozo_exception}",
                feed_url=feed_url,
                error=str(bozo_exception),
            )

        return list(feed.entries)

    def normalize_item(
        self, raw_item, feed_url: str, fetched_at: datetime | None = None
    ) -> FeedItem:
        """Normalize a raw feed entry into a FeedItem.

        Args:
            raw_item: Raw feed entry from feedparser
            feed_url: Source feed URL
            fetched_at: Fallback timestamp for entries without a usable date

        Returns:
            Normalized FeedItem object
        """
        title = getattr(raw_item, "title", None) or ""
        link = getattr(raw_item, "link", None) or ""
        description = getattr(raw_item, "summary", None) or ""

        content = None
        raw_content = getattr(raw_item, "content", None)
        if raw_content:
            if isinstance(raw_content, list):
                value = raw_content[0].get("value", "")
            else:
                value = str(raw_content)
            if value:
                content = value

        return FeedItem(
            title=title,
            link=link,
            description=description,
            created=self.parse_created(raw_item, fetched_at),
            content=content,
            feed_url=feed_url,
        )

    def parse_created(self, raw_item, fetched_at: datetime | None = None) -> datetime:
        """Return the entry's publication date as an aware datetime.

        Tries ``published`` then ``updated``. feedparser's own parsed value
        (UTC) wins; otherwise the raw string goes through dateutil, and naive
        results are taken as UTC. Falls back to ``fetched_at`` (or now) when
        neither parses.
        """
        for attr in ("published", "updated"):
            parsed = getattr(raw_item, f"{attr}_parsed", None)
            if isinstance(parsed, time.struct_time):
                return datetime(*parsed[:6], tzinfo=UTC)

            value = getattr(raw_item, attr, None)
            if not value or not isinstance(value, str):
                continue
            try:
                created = date_parser.parse(value, tzinfos=US_TZINFOS)
            except (ValueError, OverflowError):
                continue
            if created.tzinfo is None:
                created = created.replace(tzinfo=UTC)
            return created

        return fetched_at or datetime.now(UTC)
