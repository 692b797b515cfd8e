"""Unit tests for configuration management."""

import os
from pathlib import Path
from unittest.mock import patch

from blog_prerender.config import Config


class TestConfigUnit:
    """Unit tests for Config class."""

    def test_defaults_without_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            run_config = Config().get_run_config()

        assert run_config.feed_url == "https://silicode.substack.com/feed"
        assert run_config.page_path == Path("blog/index.html")
        assert run_config.log_level == "INFO"

    def test_default_feed_is_https(self):
        assert Config.DEFAULT_FEED_URL.startswith("https://")

    def test_environment_overrides_defaults(self):
        env = {
            "BLOG_FEED_URL": "https://x.test/feed",
            "BLOG_PAGE_PATH": "site/blog.html",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            run_config = Config().get_run_config()

        assert run_config.feed_url == "https://x.test/feed"
        assert run_config.page_path == Path("site/blog.html")
        assert run_config.log_level == "DEBUG"

    def test_arguments_override_environment(self):
        with patch.dict(os.environ, {"BLOG_FEED_URL": "https://env.test/feed"}, clear=True):
            run_config = Config().get_run_config(
                feed_url="https://arg.test/feed", page_path="other.html", log_level="warning"
            )

        assert run_config.feed_url == "https://arg.test/feed"
        assert run_config.page_path == Path("other.html")
        assert run_config.log_level == "WARNING"
