"""CAD Generator Module

Caller-facing facade of the assembler. One generation call creates a fresh
handle allocator and section builder, builds the document, and encodes it
to the output file. Nothing is shared between calls.

Classes:
    OutputFormat: Enum of requestable output variants.
    CADGenerator: Generates CAD files from vector primitives and text.

Example:
    >>> generator = CADGenerator()
    >>> result = generator.generate(
    ...     [VectorElement.line(0, 0, 100, 100)], ["Title"], "out/drawing.dxf"
    ... )
    >>> result.success, result.skipped_elements
    (True, 0)
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from ..models.results import GenerationResult, TranslationReport
from ..utils.config_loader import Config, GeneratorConfig
from ..utils.error_handlers import (
    CADGenerationError,
    ConfigurationError,
    UnsupportedFormatError,
    log_error_with_context,
)
from ..utils.reporting import GenerationReporter, LoggingReporter, setup_logging
from .document import DXFDocument
from .encoder import DXFEncoder
from .handles import HandleAllocator
from .section_builder import SectionBuilder

logger = logging.getLogger(__name__)

PathType = Union[str, Path]


class OutputFormat(Enum):
    """Output variants a caller can request."""

    DXF = "dxf"
    DWG = "dwg"

    @classmethod
    def coerce(cls, value: Union["OutputFormat", str]) -> "OutputFormat":
        """Return the format for an enum member or a name such as "dxf" or ".DWG".

        Raises:
            UnsupportedFormatError: If the value names no known format.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower().lstrip("."))
            except ValueError:
                pass
        raise UnsupportedFormatError(
            f"Unknown CAD format: {value!r}. Only .dxf and .dwg are recognised",
            requested_format=str(value),
        )

    @classmethod
    def from_path(cls, path: PathType) -> "OutputFormat":
        """Infer the format from a file suffix.

        Raises:
            UnsupportedFormatError: If the suffix is not .dxf or .dwg.
        """
        suffix = Path(path).suffix
        if not suffix:
            raise UnsupportedFormatError(
                f"Cannot infer CAD format from {path}: no file suffix",
                output_path=str(path),
            )
        return cls.coerce(suffix)


class CADGenerator:
    """Generates CAD files from vector primitives and extracted text.

    Attributes:
        config: Generator configuration shared by all calls.
        reporter: Receiver of assembler diagnostics.
        encoder: ASCII DXF encoder.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        reporter: Optional[GenerationReporter] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.reporter = reporter or LoggingReporter(logger)
        self.encoder = DXFEncoder(precision=self.config.coordinate_precision)

        # Inputs stored by the two-step call form.
        self._vectors: List[Any] = []
        self._texts: List[str] = []

    @classmethod
    def from_config(
        cls,
        config_path: Optional[PathType] = None,
        reporter: Optional[GenerationReporter] = None,
        configure_logging: bool = True,
    ) -> "CADGenerator":
        """Create a generator from a YAML configuration file.

        Loads and validates the file, then sets up console logging at the
        configured level.

        Args:
            config_path: Path to the YAML file. None uses built-in defaults.
            reporter: Optional diagnostics receiver.
            configure_logging: Whether to call setup_logging with the
                configured ``logging.level``.

        Raises:
            ConfigurationError: If the file cannot be loaded or fails validation.
        """
        config = Config.load(config_path)
        errors = Config.validate(config)
        if errors:
            raise ConfigurationError(f"Configuration invalid: {errors}")

        if configure_logging:
            setup_logging(config.log_level)
        logger.info(f"Loaded generator configuration from {config_path or 'defaults'}")
        return cls(config, reporter)

    # ------------------------------------------------------------------
    # Main API
    # ------------------------------------------------------------------

    def generate(
        self,
        vectors: Optional[Iterable[Any]],
        texts: Optional[Sequence[Any]],
        output_path: PathType,
        output_format: Optional[Union[OutputFormat, str]] = None,
    ) -> GenerationResult:
        """Generate a CAD file, reporting failures in the result.

        Args:
            vectors: VectorElement records (or mappings).
            texts: Extracted strings, stacked vertically in input order.
            output_path: Destination file path.
            output_format: Requested output variant. None infers it from the
                output path suffix (.dxf or .dwg).

        Returns:
            GenerationResult with status "complete", or status "failed" with
            the error type and message. Unsupported vector elements do not
            fail the call; their count is in ``skipped_elements``.
        """
        format_name = self._format_name(output_format, output_path)
        report: Optional[TranslationReport] = None
        try:
            self._select_format(output_format, output_path)
            document, report = self.build_document(vectors, texts)
            self._write(document, report, output_path)
        except CADGenerationError as e:
            log_error_with_context(
                e,
                logger,
                {
                    "output_path": str(output_path),
                    "stage": e.stage or "generation",
                    "format": format_name,
                },
            )
            return GenerationResult(
                status="failed",
                output_path=str(output_path),
                output_format=format_name,
                report=report,
                error_type=type(e).__name__,
                error_message=e.message,
                error_details=e.to_dict(),
            )

        return GenerationResult(
            status="complete",
            output_path=str(output_path),
            output_format=format_name,
            report=report,
        )

    def generate_or_raise(
        self,
        vectors: Optional[Iterable[Any]],
        texts: Optional[Sequence[Any]],
        output_path: PathType,
        output_format: Optional[Union[OutputFormat, str]] = None,
    ) -> TranslationReport:
        """Generate a CAD file and raise on failure.

        Returns:
            Translation report of the written document.

        Raises:
            UnsupportedFormatError: If a format other than DXF is requested.
            SinkOpenError: If the output file cannot be written.
            ConfigurationError: If the handle seed overlaps the reserved range.
            DocumentStructureError: If the document breaks its invariants.
        """
        self._select_format(output_format, output_path)
        document, report = self.build_document(vectors, texts)
        self._write(document, report, output_path)
        return report

    def build_document(
        self,
        vectors: Optional[Iterable[Any]] = None,
        texts: Optional[Sequence[Any]] = None,
    ) -> Tuple[DXFDocument, TranslationReport]:
        """Assemble a document without writing it.

        Raises:
            ConfigurationError: If the handle seed overlaps the reserved range.
            DocumentStructureError: If the document breaks its invariants.
        """
        try:
            allocator = HandleAllocator(self.config.handle_seed)
        except ValueError as e:
            raise ConfigurationError(
                str(e), config_key="generator.handle_seed", original_error=e
            ) from e

        builder = SectionBuilder(self.config, allocator, self.reporter)
        return builder.build(vectors, texts)

    def render(
        self,
        vectors: Optional[Iterable[Any]] = None,
        texts: Optional[Sequence[Any]] = None,
    ) -> str:
        """Return the DXF text for the inputs without touching the filesystem."""
        document, _ = self.build_document(vectors, texts)
        return self.encoder.encode(document)

    # ------------------------------------------------------------------
    # Two-step call form
    # ------------------------------------------------------------------

    def set_vectors(self, vectors: Optional[Iterable[Any]]) -> bool:
        """Store vector elements for generate_from_stored()."""
        self._vectors = list(vectors or [])
        self.reporter.info(f"Setting {len(self._vectors)} vector elements")
        return True

    def set_texts(self, texts: Optional[Sequence[Any]]) -> bool:
        """Store text elements for generate_from_stored()."""
        self._texts = list(texts or [])
        self.reporter.info(f"Setting {len(self._texts)} text elements")
        return True

    def generate_from_stored(
        self,
        output_path: PathType,
        output_format: Optional[Union[OutputFormat, str]] = None,
    ) -> GenerationResult:
        """Generate from the inputs given to set_vectors() and set_texts().

        Produces the same output as generate() with the same inputs.
        """
        return self.generate(self._vectors, self._texts, output_path, output_format)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _select_format(
        self,
        output_format: Optional[Union[OutputFormat, str]],
        output_path: PathType,
    ) -> OutputFormat:
        """Resolve the requested format before any file is touched.

        Without an explicit format the output path suffix decides.
        """
        if output_format is None:
            fmt = OutputFormat.from_path(output_path)
        else:
            fmt = OutputFormat.coerce(output_format)
        self.reporter.info(f"Generating CAD file in {fmt.name} format: {output_path}")

        if fmt is OutputFormat.DWG:
            raise UnsupportedFormatError(
                "DWG output is not supported; request DXF instead",
                requested_format=fmt.value,
                output_path=str(output_path),
            )
        return fmt

    def _write(
        self, document: DXFDocument, report: TranslationReport, output_path: PathType
    ) -> None:
        self.encoder.write_file(document, output_path)
        self.reporter.info(
            f"CAD file generated: {report.lines_written} lines, "
            f"{report.texts_written} texts, {report.skipped_count} skipped"
        )

    @staticmethod
    def _format_name(
        output_format: Optional[Union[OutputFormat, str]], output_path: PathType
    ) -> str:
        if output_format is None:
            return Path(output_path).suffix.lstrip(".").lower()
        if isinstance(output_format, OutputFormat):
            return output_format.value
        return str(output_format)
