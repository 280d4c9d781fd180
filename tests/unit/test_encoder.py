"""
Unit tests for encoder module.
"""

import io

import pytest

from pdf2cad.cad.document import DXFDocument
from pdf2cad.cad.encoder import DXFEncoder
from pdf2cad.utils.error_handlers import SinkOpenError


@pytest.fixture
def encoder():
    return DXFEncoder(precision=6)


def _small_document(terminated=True):
    document = DXFDocument()
    section = document.new_section("ENTITIES")
    section.append(0, "LINE")
    section.append(10, 1.5)
    document.terminated = terminated
    return document


class TestFormatValue:
    """Tests for DXFEncoder.format_value."""

    def test_integers(self, encoder):
        """Test integers are written as-is."""
        assert encoder.format_value(70) == "70"
        assert encoder.format_value(-3) == "-3"

    def test_booleans(self, encoder):
        """Test booleans become 1 and 0."""
        assert encoder.format_value(True) == "1"
        assert encoder.format_value(False) == "0"

    def test_floats_trimmed(self, encoder):
        """Test trailing zeros are trimmed but one decimal remains."""
        assert encoder.format_value(100.0) == "100.0"
        assert encoder.format_value(0.5) == "0.5"
        assert encoder.format_value(2.125) == "2.125"

    def test_float_precision(self):
        """Test floats are rounded to the configured precision."""
        assert DXFEncoder(precision=2).format_value(1.23456) == "1.23"
        assert DXFEncoder(precision=0).format_value(2.0) == "2.0"

    def test_negative_zero(self, encoder):
        """Test negative zero and tiny negatives are written as 0.0."""
        assert encoder.format_value(-0.0) == "0.0"
        assert encoder.format_value(-1e-9) == "0.0"

    def test_no_scientific_notation(self, encoder):
        """Test large and small values use fixed-point notation."""
        assert encoder.format_value(1e10) == "10000000000.0"
        assert "e" not in encoder.format_value(1e-5)

    def test_strings_escaped(self, encoder):
        """Test non-ASCII characters use unicode escapes."""
        assert encoder.format_value("ABC") == "ABC"
        assert encoder.format_value("Ø25") == "\\U+00D825"

    def test_negative_precision_rejected(self):
        """Test precision must be non-negative."""
        with pytest.raises(ValueError):
            DXFEncoder(precision=-1)


class TestEncode:
    """Tests for encoding whole documents."""

    def test_section_markers_and_eof(self, encoder):
        """Test section markers surround tags and EOF ends the file."""
        text = encoder.encode(_small_document())
        assert text == "0\nSECTION\n2\nENTITIES\n0\nLINE\n10\n1.5\n0\nENDSEC\n0\nEOF\n"

    def test_unterminated_document_has_no_eof(self, encoder):
        """Test EOF is only written for terminated documents."""
        text = encoder.encode(_small_document(terminated=False))
        assert "EOF" not in text
        assert text.endswith("0\nENDSEC\n")

    def test_empty_document(self, encoder):
        """Test a document without sections encodes to nothing."""
        assert encoder.encode(DXFDocument()) == ""

    def test_write_to_stream(self, encoder):
        """Test writing to a text stream returns the line count."""
        sink = io.StringIO()
        count = encoder.write(_small_document(), sink)
        assert count == 12
        assert sink.getvalue() == encoder.encode(_small_document())


class TestWriteFile:
    """Tests for DXFEncoder.write_file."""

    def test_creates_parent_directories(self, encoder, tmp_path):
        """Test output directories are created."""
        output = tmp_path / "a" / "b" / "drawing.dxf"
        encoder.write_file(_small_document(), output)

        assert output.read_text(encoding="ascii") == encoder.encode(_small_document())

    def test_no_temp_files_left(self, encoder, tmp_path):
        """Test only the target file remains after writing."""
        encoder.write_file(_small_document(), tmp_path / "drawing.dxf")
        assert [p.name for p in tmp_path.iterdir()] == ["drawing.dxf"]

    def test_unix_line_endings(self, encoder, tmp_path):
        """Test lines end with a single LF on every platform."""
        output = tmp_path / "drawing.dxf"
        encoder.write_file(_small_document(), output)
        assert b"\r" not in output.read_bytes()

    def test_unwritable_destination(self, encoder, tmp_path):
        """Test a destination below a regular file raises SinkOpenError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        output = blocker / "drawing.dxf"

        with pytest.raises(SinkOpenError) as exc_info:
            encoder.write_file(_small_document(), output)

        assert exc_info.value.output_path == str(output)
        assert not output.exists()
        assert [p.name for p in tmp_path.iterdir()] == ["blocker"]
