"""Configuration management for RSS Aggregator."""

import os
from dataclasses import dataclass

from .errors import ConfigError

MODE_SINGLE = "single"
MODE_ALL = "all"


@dataclass
class AggregationRequest:
    """Options for a single aggregation run."""

    mode: str = MODE_ALL
    single_url: str = ""
    input_file: str = ""
    count: int = 10
    output_file: str = "aggregated.xml"

    def validate(self) -> None:
        """Check that the request is consistent with its mode.

        Raises:
            ConfigError: If mode is unknown, the mode's source is missing,
                or count is not positive
        """
        if self.mode not in (MODE_SINGLE, MODE_ALL):
            raise ConfigError("mode must be 'single' or 'all'")

        if self.mode == MODE_SINGLE:
            if not self.single_url:
                raise ConfigError("single-url must be provided when mode is 'single'")
        elif not self.input_file:
            raise ConfigError("input file must be provided when mode is 'all'")

        if self.count <= 0:
            raise ConfigError("count must be greater than 0")


class Config:
    """Environment-driven settings shared by all runs."""

    DEFAULT_TIMEOUT = 30
    DEFAULT_USER_AGENT = "RSS-Aggregator/1.0"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.user_agent = os.getenv("FEED_USER_AGENT", self.DEFAULT_USER_AGENT)
        self.feed_timeout = self._parse_timeout(
            os.getenv("FEED_TIMEOUT", str(self.DEFAULT_TIMEOUT))
        )

    @staticmethod
    def _parse_timeout(raw: str) -> float:
        try:
            timeout = float(raw)
        except ValueError as e:
            raise ConfigError(f"FEED_TIMEOUT must be a number, got {raw!r}") from e

        if timeout <= 0:
            raise ConfigError("FEED_TIMEOUT must be greater than 0")
        return timeout
