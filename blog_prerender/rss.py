"""RSS feed fetching and item extraction for Blog Prerender."""

import re
from urllib.parse import urlparse

import requests
from dateutil import parser as date_parser

from .config import EXCERPT_LENGTH, MAX_ITEMS
from .errors import FetchError
from .logging_config import create_execution_logger
from .models import FeedItem

INVALID_DATE = "Invalid Date"

ITEM_RE = re.compile(r"<item>.*?</item>", re.DOTALL)
TITLE_RE = re.compile(
    r"<title><!\[CDATA\[(.*?)\]\]></title>|<title>(.*?)</title>"
)
LINK_RE = re.compile(r"<link>(.*?)</link>")
DATE_RE = re.compile(r"<pubDate>(.*?)</pubDate>")
DESCRIPTION_RE = re.compile(
    r"<description><!\[CDATA\[(.*?)\]\]></description>"
    r"|<description>(.*?)</description>",
    re.DOTALL,
)
TAG_RE = re.compile(r"<[^>]*>")


class FeedFetcher:
    """Downloads raw feed text over HTTPS."""

    def __init__(self, execution_id: str | None = None):
        """Initialize FeedFetcher.

        Args:
            execution_id: Execution ID for logging context
        """
        self.logger = create_execution_logger("feed_fetcher", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {"User-Agent": "Blog-Prerender/1.0 (RSS to static blog page)"}
        )

    def fetch(self, feed_url: str) -> str:
        """Fetch a feed and return its body as text.

        Args:
            feed_url: URL of the RSS feed

        Returns:
            Complete response body

        Raises:
            FetchError: If the URL is not HTTPS, the request fails, or the
                response status is outside 2xx
        """
        parsed_url = urlparse(feed_url)
        if parsed_url.scheme != "https":
            error_msg = f"Feed URL must use HTTPS protocol: {feed_url}"
            self.logger.error(error_msg, feed_url=feed_url)
            raise FetchError(error_msg, url=feed_url)

        try:
            self.logger.info("Downloading feed content", feed_url=feed_url)
            response = self.session.get(feed_url)
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                feed_url=feed_url,
                error=str(e),
            )
            raise FetchError(f"Request failed: {e}", url=feed_url) from e
        finally:
            self.session.close()

        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Feed request returned status {response.status_code}",
                feed_url=feed_url,
                status_code=response.status_code,
            )
            raise FetchError(
                f"Request failed: {response.status_code}",
                url=feed_url,
                status_code=response.status_code,
            )

        # XML defaults to UTF-8; requests would guess ISO-8859-1 for text/*
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"

        self.logger.info(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
        )
        return response.text


class FeedExtractor:
    """Extracts post records from raw RSS text by pattern matching."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("feed_extractor", execution_id)

    def parse_items(self, rss_text: str, limit: int = MAX_ITEMS) -> list[FeedItem]:
        """Extract up to ``limit`` items in feed order.

        Unterminated ``<item>`` blocks never match and are skipped.

        Args:
            rss_text: Raw feed body
            limit: Maximum number of items to return

        Returns:
            List of FeedItem objects
        """
        blocks = ITEM_RE.findall(rss_text)
        items = [self.normalize_item(block) for block in blocks[:limit]]

        self.logger.info(
            f"Extracted {len(items)} items from {len(blocks)} entries",
            items_count=len(items),
        )
        return items

    def normalize_item(self, block: str) -> FeedItem:
        """Normalize one ``<item>`` block into a FeedItem.

        Every field falls back to a default on its own.
        """
        title = (_first_group(TITLE_RE.search(block)) or "Untitled").strip()

        link_match = LINK_RE.search(block)
        link = ((link_match and link_match.group(1)) or "#").strip()

        date_match = DATE_RE.search(block)
        pub_date = date_match.group(1) if date_match else ""

        description = (_first_group(DESCRIPTION_RE.search(block)) or "").strip()

        return FeedItem(
            title=title,
            link=link,
            excerpt=make_excerpt(description),
            published_date=format_date(pub_date),
        )


def _first_group(match: re.Match | None) -> str:
    """Return the CDATA group if non-empty, else the plain group."""
    if not match:
        return ""
    return match.group(1) or match.group(2) or ""


def strip_tags(text: str) -> str:
    """Remove anything tag-shaped. Not an HTML parser."""
    return TAG_RE.sub("", text)


def make_excerpt(description: str, length: int = EXCERPT_LENGTH) -> str:
    """Strip tags, truncate and append an ellipsis.

    The ellipsis is appended even when nothing was cut.
    """
    return strip_tags(description)[:length] + "..."


def format_date(pub_date: str) -> str:
    """Format an RSS date as e.g. ``January 1, 2024``.

    The calendar date is taken as written; the zone is ignored, so unknown
    abbreviations such as EST do not warn.
    Empty or unparseable input yields ``Invalid Date``.
    """
    if not pub_date or not pub_date.strip():
        return INVALID_DATE

    try:
        published = date_parser.parse(pub_date, ignoretz=True)
    except (ValueError, OverflowError):
        return INVALID_DATE

    return f"{published:%B} {published.day}, {published.year}"
