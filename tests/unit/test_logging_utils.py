"""
Tests for logging helpers.

These tests check handler setup and the batch statistics context manager.
"""

import logging

import pytest

from signature_extractor.utils import ProcessingProgress, log_processing_stats, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test logging configuration."""

    def test_plain_handler_and_file(self, tmp_path):
        """Test a plain console handler plus a debug-level log file."""
        log_file = tmp_path / "logs" / "run.log"
        root = setup_logging(level="WARNING", log_file=log_file, use_rich=False)

        assert root.level == logging.WARNING
        assert len(root.handlers) == 2
        logging.getLogger("signature_extractor.test").warning("written to file")
        for handler in root.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_rich_handler(self):
        from rich.logging import RichHandler

        root = setup_logging(level=logging.DEBUG)
        assert isinstance(root.handlers[0], RichHandler)


class TestProcessingStats:
    """Test statistics tracking."""

    def test_stats_are_collected(self, caplog):
        caplog.set_level(logging.INFO)
        with log_processing_stats("extraction") as stats:
            stats["files_processed"] += 2
            stats["regions_extracted"] += 3
        assert stats["duration"] >= 0
        assert "processed=2, failed=0, regions=3" in caplog.text

    def test_errors_propagate(self):
        with pytest.raises(RuntimeError):
            with log_processing_stats("extraction"):
                raise RuntimeError("boom")

    def test_progress_counts(self):
        with ProcessingProgress("pages", total=3, enabled=False) as progress:
            progress.update()
            progress.update(success=False)
            progress.update()
        assert (progress.completed, progress.failed) == (2, 1)


def test_get_logger_returns_named_logger():
    from signature_extractor import pipeline
    from signature_extractor.utils import get_logger

    assert get_logger("signature_extractor.pipeline") is pipeline.logger
