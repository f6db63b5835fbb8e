"""Tests for the structured logger and export events."""

import logging

import pytest

from srcexport.infrastructure.logger import LogCategory, Logger, LogLevel


class TestLogger:
    """Test structured logging."""

    def test_context_formatting(self, logger, collector):
        """Appends context as key=value pairs."""
        logger.info("Exporting", source="/src", destination="/out")

        assert collector.records[0].getMessage() == "Exporting | source=/src destination=/out"

    def test_level_filtering(self, collector):
        """Drops messages below the configured level."""
        logger = Logger("srcexport.test.level", level="warning", handlers=[collector])

        logger.info("hidden")
        logger.error("shown")

        assert [r.getMessage() for r in collector.records] == ["shown"]
        assert logger.logger.level == LogLevel.WARNING

    def test_exception_context(self, logger, collector):
        """Records exception type and message."""
        logger.exception("Export failed", OSError("disk full"))

        record = collector.records[0]
        assert record.levelno == logging.ERROR
        assert record.context["exception_type"] == "OSError"
        assert "exception_message=disk full" in record.getMessage()
        assert record.exc_info[1] is not None

    def test_file_handler(self, tmp_path):
        """Writes to a log file."""
        log_file = tmp_path / "export.log"
        logger = Logger("srcexport.test.file", handlers=[])
        handler = logger.create_file_handler(log_file)
        logger.add_handler(handler)

        logger.info("Done")
        handler.close()

        assert "Done" in log_file.read_text(encoding="utf-8")


class TestEvents:
    """Test categorized export events."""

    def test_event_message(self, logger, collector):
        """Formats events as 'Category: value'."""
        logger.event(LogCategory.COPY, "/src/a.txt")

        record = collector.records[0]
        assert record.getMessage() == "Copy: /src/a.txt"
        assert record.category == LogCategory.COPY

    @pytest.mark.parametrize(
        "category,level",
        [
            (LogCategory.INCLUDE, logging.DEBUG),
            (LogCategory.EXCLUDE, logging.DEBUG),
            (LogCategory.SUMMARY, logging.INFO),
            (LogCategory.ERROR, logging.WARNING),
        ],
    )
    def test_event_levels(self, logger, collector, category, level):
        """Maps categories to log levels."""
        logger.event(category, "x")

        assert collector.records[0].levelno == level

    def test_collector_values(self, logger, collector):
        """Strips the category prefix and context."""
        logger.event(LogCategory.ERROR, "Invalid project file: a.csproj", error="bad")

        assert collector.values(LogCategory.ERROR) == ["Invalid project file: a.csproj"]
