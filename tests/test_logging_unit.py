"""Unit tests for structured logging."""

import json
import logging
import sys

from blog_prerender.logging_config import (
    StructuredFormatter,
    create_execution_logger,
    setup_structured_logging,
)


class TestLoggingUnit:
    """Unit tests for the JSON formatter and execution logger."""

    def test_formatter_includes_context(self):
        record = logging.LogRecord(
            "blog_prerender.feed_fetcher", logging.INFO, __file__, 10, "Downloading", None, None
        )
        record.execution_id = "exec_1"
        record.component = "feed_fetcher"
        record.feed_url = "https://x.test/feed"
        record.unrelated = "ignored"

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Downloading"
        assert entry["execution_id"] == "exec_1"
        assert entry["component"] == "feed_fetcher"
        assert entry["feed_url"] == "https://x.test/feed"
        assert "unrelated" not in entry

    def test_execution_logger_stamps_records(self, caplog):
        logger = create_execution_logger("renderer", "exec_42")

        with caplog.at_level(logging.INFO, logger="blog_prerender"):
            logger.info("Rendered 3 posts", items_count=3)

        record = caplog.records[-1]
        assert record.name == "blog_prerender.renderer"
        assert record.execution_id == "exec_42"
        assert record.component == "renderer"
        assert record.items_count == 3

    def test_execution_end_reports_duration(self, caplog):
        logger = create_execution_logger("main", "exec_7")

        with caplog.at_level(logging.INFO, logger="blog_prerender"):
            logger.log_execution_start()
            logger.log_execution_end(success=True)

        metrics = caplog.records[-1].metrics
        assert metrics["execution_success"] is True
        assert metrics["execution_duration_seconds"] >= 0

    def test_failed_execution_end_logs_error(self, caplog):
        logger = create_execution_logger("main", "exec_8")

        with caplog.at_level(logging.INFO, logger="blog_prerender"):
            logger.log_execution_end(success=False, error="boom")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error == "boom"
        assert record.metrics["execution_duration_seconds"] is None

    def test_generated_execution_id(self):
        logger = create_execution_logger("main")

        assert logger.execution_id.startswith("exec_")

    def test_setup_installs_single_stderr_handler(self):
        root_logger = logging.getLogger()
        original_level = root_logger.level
        original_handlers = root_logger.handlers[:]

        try:
            setup_structured_logging("warning")

            assert root_logger.level == logging.WARNING
            assert len(root_logger.handlers) == 1
            handler = root_logger.handlers[0]
            assert isinstance(handler.formatter, StructuredFormatter)
            assert handler.stream is sys.stderr
        finally:
            root_logger.handlers.clear()
            for handler in original_handlers:
                root_logger.addHandler(handler)
            root_logger.setLevel(original_level)
