"""
Diagnostic reporting for the pdf2cad assembler.

The assembler never writes diagnostics to a fixed sink. Callers inject a
reporter; the default one forwards everything to the ``logging`` module.

Classes:
    GenerationReporter: Protocol implemented by all reporters.
    LoggingReporter: Reporter that writes to a standard library logger.

Functions:
    setup_logging: Configure console logging for applications using pdf2cad.
"""

import logging
import sys
from typing import Optional, Protocol


class GenerationReporter(Protocol):
    """Observer interface for assembler diagnostics."""

    def info(self, message: str) -> None:
        """Report routine progress."""

    def warning(self, message: str) -> None:
        """Report a recoverable problem."""

    def skipped(self, index: int, kind: str, reason: str) -> None:
        """Report an input element that produced no entity.

        Args:
            index: Position of the element in the vector list.
            kind: Primitive kind name, or "unknown" if it could not be read.
            reason: Human-readable explanation.
        """


class LoggingReporter:
    """Reporter that forwards diagnostics to a logger.

    Attributes:
        logger: Target logger. Defaults to the ``pdf2cad`` logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("pdf2cad")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def skipped(self, index: int, kind: str, reason: str) -> None:
        self.logger.warning(f"Skipped vector element {index} ({kind}): {reason}")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for applications embedding the assembler.

    Sets up console logging with timestamp, logger name, level, and message
    format. Logs go to stderr.

    Args:
        log_level: Logging level as string (DEBUG, INFO, WARNING, ERROR).
            Defaults to "INFO".
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
