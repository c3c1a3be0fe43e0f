"""Concurrent feed aggregation for RSS Aggregator."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .config import MODE_SINGLE, AggregationRequest
from .errors import FetchError
from .logging_config import create_execution_logger
from .models import AggregatedFeed, FeedItem
from .rss import FeedProcessor
from .sources import resolve_urls


@dataclass
class FetchReport:
    """Outcome of one fan-out across feed URLs.

    ``failed`` holds one (url, reason) pair per failed fetch, so a URL
    listed twice can appear twice.
    """

    requested: int = 0
    items: list[FeedItem] = field(default_factory=list)
    succeeded: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def merge_items(items: list[FeedItem], count: int) -> list[FeedItem]:
    """Sort items newest first and keep at most ``count`` of them.

    The sort is stable: items with equal ``created`` keep their input order.
    """
    ordered = sorted(items, key=lambda item: item.created, reverse=True)
    return ordered[:count]


class FeedAggregator:
    """Fetches feeds concurrently and merges their items into one feed."""

    def __init__(self, processor: FeedProcessor, execution_id: str | None = None):
        self.processor = processor
        self.logger = create_execution_logger("aggregator", execution_id)
        self.last_report = FetchReport()

    def aggregate(self, request: AggregationRequest) -> AggregatedFeed:
        """Build the aggregated feed described by the request.

        In single mode the one feed is fetched synchronously and any
        FetchError propagates. In all mode every URL is fetched in parallel
        and failing feeds are skipped.

        Raises:
            FetchError: If the single-mode feed cannot be fetched
            OSError: If the URL list file cannot be read
        """
        urls = resolve_urls(request)
        self.logger.info(
            f"Aggregating {len(urls)} feeds", mode=request.mode, count=request.count
        )

        if request.mode == MODE_SINGLE:
            items = self.processor.fetch(urls[0])
            self.last_report = FetchReport(
                requested=len(urls), items=items, succeeded=list(urls)
            )
        else:
            self.last_report = self.fetch_all(urls)

        merged = merge_items(self.last_report.items, request.count)
        self.logger.info(
            f"Merged {len(self.last_report.items)} items, keeping {len(merged)}",
            items_count=len(merged),
        )
        return AggregatedFeed(items=merged)

    def fetch_all(self, urls: list[str]) -> FetchReport:
        """Fetch every URL in its own thread and wait for all of them.

        Each task hands its items back through its future. Results are
        collected in URL order once every task has finished.
        """
        report = FetchReport(requested=len(urls))
        if not urls:
            return report

        with ThreadPoolExecutor(
            max_workers=len(urls), thread_name_prefix="feed-fetch"
        ) as pool:
            futures = [(url, pool.submit(self.processor.fetch, url)) for url in urls]

        for url, future in futures:
            error = future.exception()
            if error is not None:
                reason = error.reason if isinstance(error, FetchError) else str(error)
                self.logger.warning(
                    f"Warning: failed to fetch feed {url}: {reason}",
                    feed_url=url,
                    error=reason,
                )
                report.failed.append((url, reason))
                continue
            report.items.extend(future.result())
            report.succeeded.append(url)

        return report
