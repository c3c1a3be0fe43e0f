"""Structured logging configuration for RSS Aggregator."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else arrived through ``extra``.
STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}

# Frames between a component's call site and Logger.log.
CALLER_STACKLEVEL = 3


class StructuredFormatter(logging.Formatter):
    """Renders each record as one JSON object, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for name, value in vars(record).items():
            if name not in STANDARD_RECORD_ATTRS and name not in log_entry:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ExecutionLogger:
    """Component logger that stamps every record with the run's context."""

    def __init__(self, execution_id: str, component: str = "main"):
        """Initialize execution logger.

        Args:
            execution_id: Unique identifier for this run
            component: Component name (e.g., 'feed_processor', 'aggregator')
        """
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"rss_aggregator.{component}")
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None

    def _log_with_context(self, level: int, message: str, **fields) -> None:
        extra = {"execution_id": self.execution_id, "component": self.component}
        extra.update(fields)
        self.logger.log(level, message, extra=extra, stacklevel=CALLER_STACKLEVEL)

    def info(self, message: str, **fields) -> None:
        self._log_with_context(logging.INFO, message, **fields)

    def warning(self, message: str, **fields) -> None:
        self._log_with_context(logging.WARNING, message, **fields)

    def error(self, message: str, **fields) -> None:
        self._log_with_context(logging.ERROR, message, **fields)

    def debug(self, message: str, **fields) -> None:
        self._log_with_context(logging.DEBUG, message, **fields)

    def log_execution_start(self, **fields) -> None:
        """Record the run's start time and log it."""
        self.start_time = datetime.now(UTC)
        self._log_with_context(
            logging.INFO,
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **fields,
        )

    def log_execution_end(self, success: bool = True, **fields) -> None:
        """Log the run's end, its duration and whether it succeeded.

        Failed runs are logged at ERROR so they stand out in the stream.
        """
        self.end_time = datetime.now(UTC)

        duration_seconds = None
        if self.start_time:
            duration_seconds = (self.end_time - self.start_time).total_seconds()

        self._log_with_context(
            logging.INFO if success else logging.ERROR,
            f"Completed {self.component} execution",
            execution_end=self.end_time.isoformat(),
            execution_duration_seconds=duration_seconds,
            execution_success=success,
            **fields,
        )

    def log_feed_processing(self, feed_url: str, items_count: int) -> None:
        self._log_with_context(
            logging.INFO,
            f"Processed feed: {items_count} items found",
            feed_url=feed_url,
            items_count=items_count,
        )

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        self._log_with_context(logging.INFO, "Execution metrics", metrics=metrics)


def setup_structured_logging(log_level: str = "INFO") -> None:
    """Send JSON logs for the whole process to stderr.

    stdout stays free for tooling. Calling this again replaces the handler.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    package_logger = logging.getLogger("rss_aggregator")
    package_logger.setLevel(level)
    for component in ("main", "feed_processor", "aggregator", "writer"):
        # Component loggers inherit the package level.
        logging.getLogger(f"rss_aggregator.{component}").setLevel(logging.NOTSET)

    # requests/urllib3 connection chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger for a component.

    A fresh ``exec_<timestamp>`` ID is generated when none is given.
    """
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    return ExecutionLogger(execution_id, component)
