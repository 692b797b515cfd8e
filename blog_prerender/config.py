"""Configuration management for Blog Prerender."""

import os
from dataclasses import dataclass
from pathlib import Path

# Feed extraction limits
MAX_ITEMS = 8
MAX_SCHEMA_ITEMS = 5
EXCERPT_LENGTH = 180


@dataclass
class RunConfig:
    """Resolved settings for a single prerender run."""

    feed_url: str
    page_path: Path
    log_level: str = "INFO"


class Config:
    """Main configuration manager."""

    DEFAULT_FEED_URL = "https://silicode.substack.com/feed"
    DEFAULT_PAGE_PATH = "blog/index.html"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.feed_url = os.getenv("BLOG_FEED_URL", self.DEFAULT_FEED_URL)
        self.page_path = os.getenv("BLOG_PAGE_PATH", self.DEFAULT_PAGE_PATH)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def get_run_config(
        self,
        feed_url: str | None = None,
        page_path: str | None = None,
        log_level: str | None = None,
    ) -> RunConfig:
        """Get run configuration, letting explicit arguments win over environment."""
        return RunConfig(
            feed_url=feed_url or self.feed_url,
            page_path=Path(page_path or self.page_path),
            log_level=(log_level or self.log_level).upper(),
        )
