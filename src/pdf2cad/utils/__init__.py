"""Utility functions for the pdf2cad assembler."""

from .config_loader import Config, GeneratorConfig
from .error_handlers import (
    CADGenerationError,
    ConfigurationError,
    DocumentStructureError,
    PrimitiveTranslationError,
    SinkOpenError,
    UnsupportedFormatError,
)
from .file_utils import atomic_text_writer, ensure_directory
from .reporting import GenerationReporter, LoggingReporter, setup_logging
from .text_utils import escape_non_ascii, normalize_whitespace

__all__ = [
    "Config",
    "GeneratorConfig",
    "CADGenerationError",
    "ConfigurationError",
    "DocumentStructureError",
    "PrimitiveTranslationError",
    "SinkOpenError",
    "UnsupportedFormatError",
    "atomic_text_writer",
    "ensure_directory",
    "GenerationReporter",
    "LoggingReporter",
    "setup_logging",
    "escape_non_ascii",
    "normalize_whitespace",
]
