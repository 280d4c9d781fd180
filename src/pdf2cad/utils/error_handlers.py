"""
Error handling utilities for the pdf2cad assembler.

This module provides custom exceptions and error logging helpers for the
CAD generation pipeline.

Classes:
    CADGenerationError: Base exception for all CAD generation errors.
    SinkOpenError: Exception for output files that cannot be created or written.
    UnsupportedFormatError: Exception for output variants with no encoder.
    PrimitiveTranslationError: Exception for vector elements that cannot be
        translated into entities.
    DocumentStructureError: Exception for assembled documents that break the
        handle/owner invariants.
    ConfigurationError: Exception for configuration errors.

Functions:
    log_error_with_context: Log error with full context for debugging.
"""

import logging
import traceback
from typing import Any, Dict, List, Optional


class CADGenerationError(Exception):
    """
    Base exception for CAD generation errors.

    Attributes:
        message: Error message describing what went wrong.
        output_path: Optional destination of the file being generated.
        stage: Optional generation stage where the error occurred.
        recoverable: Whether generation can continue past the error.
        original_error: Optional underlying exception that was wrapped.
    """

    def __init__(
        self,
        message: str,
        output_path: Optional[str] = None,
        stage: Optional[str] = None,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize CADGenerationError.

        Args:
            message: Error message describing the issue.
            output_path: Optional output destination.
            stage: Optional generation stage name.
            recoverable: Whether generation can continue.
            original_error: Optional underlying exception that caused this error.
        """
        self.message = message
        self.output_path = output_path
        self.stage = stage
        self.recoverable = recoverable
        self.original_error = original_error
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging and reporting.

        Returns:
            Dictionary containing error_type, message, output_path, stage,
            recoverable status, and original error information if available.
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "output_path": self.output_path,
            "stage": self.stage,
            "recoverable": self.recoverable,
        }

        if self.original_error:
            result["original_error_type"] = type(self.original_error).__name__
            result["original_error_message"] = str(self.original_error)

        return result


class SinkOpenError(CADGenerationError):
    """
    Exception for output destinations that cannot be opened or written.

    Attributes:
        output_path: Destination that failed.
    """

    def __init__(
        self,
        message: str,
        output_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize SinkOpenError.

        Args:
            message: Error message describing the I/O issue.
            output_path: Optional destination path.
            original_error: Optional underlying OSError.
        """
        super().__init__(
            message=message,
            output_path=output_path,
            stage="encoding",
            recoverable=False,
            original_error=original_error,
        )


class UnsupportedFormatError(CADGenerationError):
    """
    Exception for requested output variants that have no encoder.

    Attributes:
        requested_format: The format value that was requested.
    """

    def __init__(
        self,
        message: str,
        requested_format: Optional[str] = None,
        output_path: Optional[str] = None,
    ):
        """
        Initialize UnsupportedFormatError.

        Args:
            message: Error message describing the format issue.
            requested_format: Optional format value that was requested.
            output_path: Optional output destination.
        """
        super().__init__(
            message=message,
            output_path=output_path,
            stage="format_selection",
            recoverable=False,  # No best-effort output for other variants
        )
        self.requested_format = requested_format

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary including the requested format.

        Returns:
            Dictionary with all base fields plus requested_format.
        """
        result = super().to_dict()
        result["requested_format"] = self.requested_format
        return result


class PrimitiveTranslationError(CADGenerationError):
    """
    Exception for vector elements that cannot be translated into entities.

    Attributes:
        element_index: Optional position of the element in the input list.
        kind: Optional primitive kind name.
    """

    def __init__(
        self,
        message: str,
        element_index: Optional[int] = None,
        kind: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize PrimitiveTranslationError.

        Args:
            message: Error message describing the translation issue.
            element_index: Optional index of the element in the input list.
            kind: Optional primitive kind name.
            original_error: Optional underlying exception that caused this error.
        """
        super().__init__(
            message=message,
            stage="entities",
            recoverable=True,  # Element is skipped, document continues
            original_error=original_error,
        )
        self.element_index = element_index
        self.kind = kind

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary including element position and kind.

        Returns:
            Dictionary with all base fields plus element_index and kind.
        """
        result = super().to_dict()
        result["element_index"] = self.element_index
        result["kind"] = self.kind
        return result


class DocumentStructureError(CADGenerationError):
    """
    Exception for assembled documents that violate structural invariants.

    Attributes:
        errors: List of individual invariant violations.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        """
        Initialize DocumentStructureError.

        Args:
            message: Error message summarizing the violations.
            errors: Optional list of individual violation messages.
        """
        super().__init__(
            message=message,
            stage="section_builder",
            recoverable=False,
        )
        self.errors = list(errors or [])

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary including the violation list.

        Returns:
            Dictionary with all base fields plus errors.
        """
        result = super().to_dict()
        result["errors"] = list(self.errors)
        return result


class ConfigurationError(CADGenerationError):
    """
    Exception for configuration errors.

    Attributes:
        config_key: Optional configuration key that caused the error.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Error message describing configuration issue.
            config_key: Optional configuration key that is invalid.
            original_error: Optional underlying exception that caused this error.
        """
        super().__init__(
            message=message,
            stage="initialization",
            recoverable=False,  # Config errors not recoverable without fix
            original_error=original_error,
        )
        self.config_key = config_key

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary including config key.

        Returns:
            Dictionary with all base fields plus config_key.
        """
        result = super().to_dict()
        result["config_key"] = self.config_key
        return result


def log_error_with_context(
    error: Exception, logger: logging.Logger, context: Dict[str, Any]
) -> None:
    """
    Log error with context information for debugging.

    Logs error details including type, message, and all contextual information.
    In DEBUG mode, also logs the full stack trace.

    Args:
        error: The exception that occurred.
        logger: Logger instance to use for logging.
        context: Dictionary with contextual information (output_path, stage, etc.).

    Returns:
        None

    Note:
        Stack traces are only logged when logger is at DEBUG level or lower.
    """
    error_type = type(error).__name__
    error_message = str(error)

    output_path = context.get("output_path", "unknown")
    stage = context.get("stage", "unknown")

    logger.error(
        f"Error in {stage} for output {output_path}: [{error_type}] {error_message}"
    )

    if isinstance(error, CADGenerationError) and error.original_error:
        original_type = type(error.original_error).__name__
        original_msg = str(error.original_error)
        logger.error(f"  Original error: [{original_type}] {original_msg}")

    for key, value in context.items():
        if key not in ["output_path", "stage"]:
            logger.error(f"  {key}: {value}")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Stack trace:")
        logger.debug(traceback.format_exc())
