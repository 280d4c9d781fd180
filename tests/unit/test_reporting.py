"""
Unit tests for reporting module.
"""

import logging

from pdf2cad.utils.config_loader import GeneratorConfig
from pdf2cad.utils.reporting import LoggingReporter, setup_logging


class TestLoggingReporter:
    """Tests for LoggingReporter class."""

    def test_default_logger(self):
        """Test the package logger is used by default."""
        assert LoggingReporter().logger.name == "pdf2cad"

    def test_skipped_logged_as_warning(self, caplog):
        """Test skipped elements produce a warning with index and kind."""
        reporter = LoggingReporter(logging.getLogger("pdf2cad.test"))

        with caplog.at_level(logging.INFO, logger="pdf2cad.test"):
            reporter.info("Writing 2 vector elements")
            reporter.skipped(1, "circle", "no translation for circle primitives")

        levels = [record.levelname for record in caplog.records]
        assert levels == ["INFO", "WARNING"]
        assert "Skipped vector element 1 (circle)" in caplog.records[1].getMessage()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_accepts_config_level(self):
        """Test configured level names are accepted in any case."""
        setup_logging(GeneratorConfig(log_level="debug").log_level)
        setup_logging()
