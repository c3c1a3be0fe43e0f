"""Unit and property tests for feed URL sources."""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rss_aggregator.config import AggregationRequest
from rss_aggregator.sources import resolve_from_file, resolve_single, resolve_urls


class TestSourcesUnit:
    """Unit tests for URL resolution."""

    def test_resolve_single(self):
        assert resolve_single("http://example.com/rss") == ["http://example.com/rss"]

    def test_urls_with_comments(self, tmp_path):
        feeds = tmp_path / "feeds.txt"
        feeds.write_text(
            "# This is a comment\n"
            "http://example.com/feed1.xml\n"
            "https://example.com/feed2.xml\n"
            "# Another comment\n"
            "http://example.com/feed3.xml\n"
            "\n"
            "# Empty line above should be ignored",
            encoding="utf-8",
        )

        assert resolve_from_file(feeds) == [
            "http://example.com/feed1.xml",
            "https://example.com/feed2.xml",
            "http://example.com/feed3.xml",
        ]

    def test_only_comments_and_blank_lines(self, tmp_path):
        feeds = tmp_path / "feeds.txt"
        feeds.write_text("# Comment 1\n# Comment 2\n\n   \n# Comment 3", encoding="utf-8")

        assert resolve_from_file(feeds) == []

    def test_urls_with_whitespace(self, tmp_path):
        feeds = tmp_path / "feeds.txt"
        feeds.write_text(
            "  http://example.com/feed1.xml  \n"
            "\thttps://example.com/feed2.xml\t\n"
            "   # indented comment\n"
            "http://example.com/feed3.xml",
            encoding="utf-8",
        )

        assert resolve_from_file(feeds) == [
            "http://example.com/feed1.xml",
            "https://example.com/feed2.xml",
            "http://example.com/feed3.xml",
        ]

    def test_non_utf8_bytes_do_not_fail(self, tmp_path):
        feeds = tmp_path / "feeds.txt"
        feeds.write_bytes(b"# caf\xe9 feeds\nhttp://a.example.com/rss\n")

        assert resolve_from_file(feeds) == ["http://a.example.com/rss"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            resolve_from_file(tmp_path / "does-not-exist.txt")

    def test_resolve_urls_dispatches_on_mode(self, tmp_path):
        feeds = tmp_path / "feeds.txt"
        feeds.write_text("http://example.com/a\n", encoding="utf-8")

        single = AggregationRequest(mode="single", single_url="http://example.com/b")
        multi = AggregationRequest(mode="all", input_file=str(feeds))

        assert resolve_urls(single) == ["http://example.com/b"]
        assert resolve_urls(multi) == ["http://example.com/a"]


line_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")),
    max_size=40,
)


class TestSourcesProperties:
    """Property-based tests for URL file parsing."""

    @given(st.lists(line_text, max_size=20))
    def test_parsing_is_idempotent_and_filters_lines(self, lines):
        """Parsing a file twice gives the same URLs; no blanks or comments survive."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "feeds.txt"
            path.write_text("\n".join(lines), encoding="utf-8")

            first = resolve_from_file(path)
            second = resolve_from_file(path)

        assert first == second
        expected = [
            line.strip()
            for line in lines
            if line.strip() and not line.strip().startswith("#")
        ]
        assert first == expected
        for url in first:
            assert url
            assert not url.startswith("#")
            assert url == url.strip()
