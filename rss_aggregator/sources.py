"""Feed URL sources for RSS Aggregator."""

from pathlib import Path

from .config import MODE_SINGLE, AggregationRequest


def resolve_single(url: str) -> list[str]:
    """Wrap a single feed URL in a list."""
    return [url.strip()]


def resolve_from_file(path: str | Path) -> list[str]:
    """Read feed URLs from a line-oriented file.

    Blank lines and lines starting with ``#`` (after trimming) are skipped.
    File order is preserved. Bytes that are not valid UTF-8 are replaced
    rather than failing the run.

    Args:
        path: Path to a UTF-8 text file with one URL per line

    Returns:
        List of URLs in file order

    Raises:
        OSError: If the file cannot be opened or read
    """
    urls = []
    with open(path, encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                urls.append(line)
    return urls


def resolve_urls(request: AggregationRequest) -> list[str]:
    """Return the feed URLs selected by the request's mode."""
    if request.mode == MODE_SINGLE:
        return resolve_single(request.single_url)
    return resolve_from_file(request.input_file)
