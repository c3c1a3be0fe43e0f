"""Shared helpers for RSS Aggregator tests."""

import logging
from unittest.mock import Mock

import pytest
import requests


def rss_document(*items: tuple[str, str, str]) -> bytes:
    """Build an RSS 2.0 document from (title, link, pubDate) tuples."""
    entries = "".join(
        f"<item><title>{title}</title><link>{link}</link>"
        f"<description>About {title}</description>"
        f"<pubDate>{pub_date}</pubDate></item>"
        for title, link, pub_date in items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        "<title>Test Feed</title><link>http://example.com</link>"
        "<description>Test feed</description>"
        f"{entries}</channel></rss>"
    ).encode("utf-8")


def http_response(content: bytes, status_code: int = 200) -> Mock:
    """Build a mock requests.Response carrying ``content``."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error"
        )
    else:
        response.raise_for_status.return_value = None
    return response


def fake_http(routes: dict[str, Mock | Exception]):
    """Return a Session.get replacement serving canned responses by URL."""

    def get(url, timeout=None, **kwargs):
        route = routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        return route

    return get


@pytest.fixture
def restore_logging():
    """Restore root logger handlers after a test reconfigures logging."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers[:]
    yield root_logger
    root_logger.handlers.clear()
    root_logger.handlers.extend(original_handlers)
    root_logger.setLevel(original_level)
