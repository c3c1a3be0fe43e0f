"""Command-line entry point for RSS Aggregator."""

import argparse
import sys
from datetime import UTC, datetime

from . import writer
from .aggregator import FeedAggregator
from .config import MODE_ALL, MODE_SINGLE, AggregationRequest, Config
from .errors import ConfigError, FetchError, SerializationError
from .logging_config import create_execution_logger, setup_structured_logging
from .rss import FeedProcessor


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the aggregator CLI."""
    parser = argparse.ArgumentParser(
        prog="rss-aggregator",
        description="Merge several RSS/Atom feeds into one RSS 2.0 document.",
    )
    parser.add_argument(
        "-input",
        "--input",
        dest="input_file",
        default="",
        help="Input file containing RSS feed URLs (one per line)",
    )
    parser.add_argument(
        "-count",
        "--count",
        type=int,
        default=10,
        help="Number of items to include",
    )
    parser.add_argument(
        "-mode",
        "--mode",
        default=MODE_ALL,
        help=f"Mode: '{MODE_SINGLE}' for one source, '{MODE_ALL}' for all sources",
    )
    parser.add_argument(
        "-single-url",
        "--single-url",
        dest="single_url",
        default="",
        help="Single RSS feed URL (when mode=single)",
    )
    parser.add_argument(
        "-output",
        "--output",
        dest="output_file",
        default="aggregated.xml",
        help="Output file path",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one aggregation and return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = Config()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_structured_logging(config.log_level)

    execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)

    request = AggregationRequest(
        mode=args.mode,
        single_url=args.single_url,
        input_file=args.input_file,
        count=args.count,
        output_file=args.output_file,
    )

    try:
        request.validate()
    except ConfigError as e:
        main_logger.error(f"Configuration error: {e}", error=str(e))
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    main_logger.log_execution_start(mode=request.mode, count=request.count)

    processor = FeedProcessor(
        timeout=config.feed_timeout,
        user_agent=config.user_agent,
        execution_id=execution_id,
    )
    aggregator = FeedAggregator(processor, execution_id=execution_id)

    try:
        feed = aggregator.aggregate(request)
    except (FetchError, OSError) as e:
        main_logger.error(f"Error aggregating feeds: {e}", error=str(e))
        main_logger.log_execution_end(success=False)
        print(f"Error aggregating feeds: {e}", file=sys.stderr)
        return 1

    try:
        writer.write(feed, request.output_file, execution_id=execution_id)
    except (SerializationError, OSError) as e:
        main_logger.error(f"Error outputting feed: {e}", error=str(e))
        main_logger.log_execution_end(success=False)
        print(f"Error outputting feed: {e}", file=sys.stderr)
        return 1

    report = aggregator.last_report
    main_logger.log_metrics(
        {
            "feeds_requested": report.requested,
            "feeds_succeeded": len(report.succeeded),
            "feeds_failed": len(report.failed),
            "items_found": len(report.items),
            "items_written": len(feed.items),
        }
    )
    main_logger.log_execution_end(success=True, output_file=request.output_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
