"""Tests for logging utilities."""

import logging
from unittest.mock import MagicMock

import pytest
import structlog

from hoardview.utils import RevealLogger, RevealStats, configure_logging


@pytest.fixture
def restore_logging():
    """Undo handler and structlog changes made by configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_log_file(self, tmp_path, restore_logging):
        """Test that events reach the log file as JSON."""
        log_file = tmp_path / "hoardview.log"

        logger = configure_logging(log_file=log_file, console_level="ERROR")
        logger.info("Font rendered", font="ibm/vga.yaff")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert '"event": "Font rendered"' in text
        assert '"font": "ibm/vga.yaff"' in text

    def test_reconfigure_replaces_handlers(self, tmp_path, restore_logging):
        root = logging.getLogger()
        before = len(root.handlers)

        configure_logging(log_file=tmp_path / "a.log")
        configure_logging(log_file=tmp_path / "b.log")

        assert len(root.handlers) == before + 2


class TestRevealLogger:
    """Tests for RevealLogger."""

    def test_counts(self):
        """Test that reveals, cache hits and errors are tallied."""
        logger = MagicMock()
        reveal_logger = RevealLogger(logger)

        reveal_logger.log_font_revealed("a.yaff", "A", cached=False, duration_ms=1.234)
        reveal_logger.log_font_revealed("b.yaff", "B", cached=True, duration_ms=0.1)
        reveal_logger.log_font_error("c.yaff", ValueError("broken"))

        stats = reveal_logger.stats
        assert stats.revealed_count == 2
        assert stats.cached_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("c.yaff", "broken")]
        assert logger.info.call_args_list[0].kwargs["duration_ms"] == 1.23

    def test_duration_without_times(self):
        assert RevealStats().duration_seconds == 0.0
