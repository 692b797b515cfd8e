"""Pipeline entry point for Blog Prerender."""

import argparse
import os
import shutil
import sys
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from .config import Config
from .errors import FilesystemError, PrerenderError
from .logging_config import (
    ExecutionLogger,
    create_execution_logger,
    setup_structured_logging,
)
from .models import PageDocument
from .render import PageRenderer
from .rss import FeedExtractor, FeedFetcher


def read_page(page_path: Path, logger: ExecutionLogger) -> PageDocument:
    """Read the static page and split it on its markers.

    Raises:
        FilesystemError: If the page cannot be read
        TemplateError: If the markers are missing
    """
    try:
        with open(page_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            f"Failed to read page {page_path}: {e}",
            page_path=str(page_path),
            error=str(e),
        )
        raise FilesystemError(f"Cannot read {page_path}: {e}", path=str(page_path)) from e

    try:
        return PageDocument.from_text(text)
    except PrerenderError as e:
        logger.error(str(e), page_path=str(page_path))
        raise


def write_page(page_path: Path, text: str, logger: ExecutionLogger) -> None:
    """Overwrite the page with the rendered text.

    The text goes to a temporary file next to the page, which then replaces
    the page, so a failed write leaves the old page in place.

    Raises:
        FilesystemError: If the page cannot be written
    """
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=Path(page_path).parent,
            prefix=".prerender-",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = f.name
            f.write(text)
        shutil.copymode(page_path, tmp_path)
        os.replace(tmp_path, page_path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        logger.error(
            f"Failed to write page {page_path}: {e}",
            page_path=str(page_path),
            error=str(e),
        )
        raise FilesystemError(f"Cannot write {page_path}: {e}", path=str(page_path)) from e


def run(feed_url: str, page_path: Path, execution_id: str | None = None) -> int:
    """Fetch the feed, render it into the page and rewrite the page.

    The page is only written once everything else has succeeded.

    Args:
        feed_url: HTTPS URL of the RSS feed
        page_path: Static page containing the blog markers
        execution_id: Execution ID for logging context

    Returns:
        Number of posts rendered

    Raises:
        PrerenderError: On any fatal fetch, template or filesystem error
    """
    if not execution_id:
        execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start(feed_url=feed_url, page_path=str(page_path))

    try:
        page = read_page(page_path, main_logger)

        rss_text = FeedFetcher(execution_id=execution_id).fetch(feed_url)
        items = FeedExtractor(execution_id=execution_id).parse_items(rss_text)
        new_text = PageRenderer(execution_id=execution_id).render(page, items)

        write_page(page_path, new_text, main_logger)
    except PrerenderError as e:
        main_logger.log_execution_end(success=False, error=str(e))
        raise

    main_logger.log_metrics(
        {"items_rendered": len(items), "page_bytes": len(new_text.encode("utf-8"))}
    )
    main_logger.log_execution_end(success=True, items_count=len(items))
    return len(items)


def _parse_args(argv: list[str] | None):
    p = argparse.ArgumentParser(
        prog="blog-prerender",
        description="Pre-render the latest RSS posts into a static blog page",
    )
    p.add_argument("feed_url", nargs="?", default=None, help="RSS feed URL (HTTPS)")
    p.add_argument("--page", default=None, help="Page to rewrite (default: blog/index.html)")
    p.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point. Returns the process exit code."""
    args = _parse_args(argv)
    run_config = Config().get_run_config(
        feed_url=args.feed_url, page_path=args.page, log_level=args.log_level
    )
    setup_structured_logging(run_config.log_level)

    try:
        count = run(run_config.feed_url, run_config.page_path)
    except PrerenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Pre-rendered {count} posts into {run_config.page_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
