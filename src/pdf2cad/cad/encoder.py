"""ASCII DXF encoder.

Serializes an assembled DXFDocument as the ASCII DXF grammar: each tag is
two lines, the integer group code then its value. Section markers and the
EOF sentinel come from the document structure. The encoder performs no
validation; the section builder is responsible for a well-formed document.

Classes:
    DXFEncoder: Writes documents to strings, streams, or files.

Example:
    >>> encoder = DXFEncoder(precision=6)
    >>> encoder.write_file(document, "drawing.dxf")
"""

import logging
import math
from pathlib import Path
from typing import Iterator, List, TextIO, Union

from ..utils.error_handlers import SinkOpenError
from ..utils.file_utils import atomic_text_writer
from ..utils.text_utils import escape_non_ascii
from .document import DXFDocument, DXFTag, TagValue

logger = logging.getLogger(__name__)


class DXFEncoder:
    """Encodes DXF documents in the ASCII variant of the format.

    Attributes:
        precision: Maximum number of decimal places written for floats.
    """

    def __init__(self, precision: int = 6) -> None:
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")
        self.precision = precision

    def format_value(self, value: TagValue) -> str:
        """Format one tag value as its DXF text line.

        Floats use fixed-point notation with trailing zeros trimmed and at
        least one decimal; booleans become 1/0; strings have non-ASCII
        characters escaped as \\U+XXXX.
        """
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return self._format_float(value)
        return escape_non_ascii(str(value))

    def _format_float(self, value: float) -> str:
        if not math.isfinite(value):
            # Written as-is; the builder never produces these.
            return repr(value)
        text = f"{value:.{self.precision}f}"
        if "." in text:
            text = text.rstrip("0")
            if text.endswith("."):
                text += "0"
        else:
            text += ".0"
        if text in ("-0.0", "-0"):
            text = "0.0"
        return text

    def iter_tag_lines(self, tag: DXFTag) -> Iterator[str]:
        yield str(tag.code)
        yield self.format_value(tag.value)

    def iter_lines(self, document: DXFDocument) -> Iterator[str]:
        """Yield every output line of the document, without line endings."""
        for section in document.sections:
            yield from ("0", "SECTION", "2", section.name)
            for tag in section.tags:
                yield from self.iter_tag_lines(tag)
            yield from ("0", "ENDSEC")
        if document.terminated:
            yield from ("0", "EOF")

    def encode(self, document: DXFDocument) -> str:
        """Return the complete DXF text of the document."""
        lines: List[str] = list(self.iter_lines(document))
        return "\n".join(lines) + "\n" if lines else ""

    def write(self, document: DXFDocument, sink: TextIO) -> int:
        """Write the document to an open text stream.

        Returns:
            Number of lines written.
        """
        count = 0
        for line in self.iter_lines(document):
            sink.write(line)
            sink.write("\n")
            count += 1
        return count

    def write_file(self, document: DXFDocument, output_path: Union[str, Path]) -> Path:
        """Write the document to a file atomically.

        The content goes to a temporary file in the target directory which
        replaces output_path only after every line was written. On failure
        the temporary file is removed and output_path is left untouched.

        Args:
            document: Document to encode.
            output_path: Destination file path.

        Returns:
            The destination path.

        Raises:
            SinkOpenError: If the destination cannot be created or written.
        """
        output_path = Path(output_path)
        logger.info(f"Writing DXF file: {output_path}")

        try:
            with atomic_text_writer(output_path, encoding="ascii") as sink:
                line_count = self.write(document, sink)
        except (IOError, OSError) as e:
            error_msg = f"Failed to write DXF file {output_path}: {e}"
            logger.error(error_msg)
            raise SinkOpenError(
                error_msg, output_path=str(output_path), original_error=e
            ) from e

        logger.info(f"DXF file written successfully ({line_count} lines)")
        return output_path
