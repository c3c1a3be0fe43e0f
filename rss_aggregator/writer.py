"""RSS 2.0 output for RSS Aggregator."""

import re
import xml.etree.ElementTree as ET
from email.utils import format_datetime
from pathlib import Path

from .errors import SerializationError
from .logging_config import create_execution_logger
from .models import AggregatedFeed

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"

ET.register_namespace("content", CONTENT_NS)

# Characters outside the XML 1.0 Char production.
INVALID_XML_CHARS = re.compile(
    r"[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def xml_text(value: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return INVALID_XML_CHARS.sub("", value)


def render(feed: AggregatedFeed) -> bytes:
    """Serialize the aggregated feed as an RSS 2.0 document.

    Raises:
        SerializationError: If the feed contains values that cannot be rendered
    """
    try:
        rss = ET.Element("rss", version="2.0")
        channel = ET.SubElement(rss, "channel")
        ET.SubElement(channel, "title").text = xml_text(feed.title)
        ET.SubElement(channel, "link").text = xml_text(feed.link)
        ET.SubElement(channel, "description").text = xml_text(feed.description)
        ET.SubElement(channel, "pubDate").text = format_datetime(feed.created)

        for item in feed.items:
            element = ET.SubElement(channel, "item")
            ET.SubElement(element, "title").text = xml_text(item.title)
            ET.SubElement(element, "link").text = xml_text(item.link)
            ET.SubElement(element, "description").text = xml_text(item.description)
            if item.content:
                encoded = ET.SubElement(element, f"{{{CONTENT_NS}}}encoded")
                encoded.text = xml_text(item.content)
            ET.SubElement(element, "pubDate").text = format_datetime(item.created)

        return ET.tostring(rss, encoding="utf-8", xml_declaration=True)
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"error generating RSS: {e}") from e


def write(feed: AggregatedFeed, path: str | Path, execution_id: str | None = None) -> None:
    """Render the feed and write it to ``path``, replacing any existing file.

    Raises:
        SerializationError: If the feed cannot be rendered
        OSError: If the file cannot be created or written
    """
    logger = create_execution_logger("writer", execution_id)
    document = render(feed)

    with open(path, "wb") as f:
        f.write(document)

    logger.info(
        f"Wrote {len(feed.items)} items to {path}",
        items_count=len(feed.items),
        output_file=str(path),
    )
