"""
Unit tests for translation module.
"""

import pytest

from pdf2cad.cad.document import DXFTag
from pdf2cad.cad.translation import (
    STANDARD_LINEWEIGHTS,
    TRANSLATION_TABLE,
    EntityHeader,
    TextLayout,
    Unsupported,
    lookup_rule,
    snap_lineweight,
    translate_line,
    translate_text,
)
from pdf2cad.models.primitives import PrimitiveKind, VectorElement
from pdf2cad.utils.error_handlers import PrimitiveTranslationError


def _values(tags, code):
    return [tag.value for tag in tags if tag.code == code]


@pytest.fixture
def header():
    return EntityHeader(handle="40", owner="34", layer="0")


class TestTranslationTable:
    """Tests for the translation table."""

    def test_every_kind_has_a_rule(self):
        """Test no primitive kind is missing from the table."""
        assert set(TRANSLATION_TABLE) == set(PrimitiveKind)

    def test_line_is_translated(self):
        """Test LINE maps to translate_line."""
        assert lookup_rule(PrimitiveKind.LINE) is translate_line

    @pytest.mark.parametrize(
        "kind", [PrimitiveKind.CURVE, PrimitiveKind.CIRCLE, PrimitiveKind.RECTANGLE]
    )
    def test_other_kinds_unsupported(self, kind):
        """Test the remaining kinds are marked unsupported with a reason."""
        rule = lookup_rule(kind)
        assert isinstance(rule, Unsupported)
        assert kind.value in rule.reason


class TestEntityHeader:
    """Tests for EntityHeader class."""

    def test_common_tags(self, header):
        """Test entity type, handle, owner, and layer tags."""
        tags = header.tags("LINE")
        assert tags == [
            DXFTag(0, "LINE"),
            DXFTag(5, "40"),
            DXFTag(330, "34"),
            DXFTag(100, "AcDbEntity"),
            DXFTag(8, "0"),
        ]

    def test_lineweight_tag(self, header):
        """Test lineweight is appended after the layer."""
        tags = header.tags("LINE", 25)
        assert tags[-1] == DXFTag(370, 25)


class TestTranslateLine:
    """Tests for translate_line function."""

    def test_start_and_end_points(self, header):
        """Test start and end coordinates in the XY plane."""
        tags = translate_line(VectorElement.line(0, 0, 100, 100), header)

        assert tags[0] == DXFTag(0, "LINE")
        assert _values(tags, 10) == [0.0]
        assert _values(tags, 20) == [0.0]
        assert _values(tags, 30) == [0.0]
        assert _values(tags, 11) == [100.0]
        assert _values(tags, 21) == [100.0]
        assert _values(tags, 31) == [0.0]
        assert DXFTag(100, "AcDbLine") in tags

    def test_no_lineweight_without_converter(self, header):
        """Test thickness is ignored when lineweights are disabled."""
        tags = translate_line(VectorElement.line(0, 0, 1, 1, thickness=2), header)
        assert _values(tags, 370) == []

    def test_lineweight_from_thickness(self, header):
        """Test thickness is converted through the given function."""
        element = VectorElement.line(0, 0, 1, 1, thickness=1.0)
        tags = translate_line(element, header, lambda t: snap_lineweight(t, 35.2778))
        assert _values(tags, 370) == [35]

    def test_short_line_raises(self, header):
        """Test a line with fewer than 4 scalars cannot be translated."""
        element = VectorElement("line", (0, 0, 1))
        with pytest.raises(PrimitiveTranslationError) as exc_info:
            translate_line(element, header)
        assert exc_info.value.recoverable
        assert exc_info.value.kind == "line"


class TestSnapLineweight:
    """Tests for snap_lineweight function."""

    def test_zero_thickness(self):
        """Test non-positive thickness yields no lineweight."""
        assert snap_lineweight(0.0, 35.2778) is None

    def test_snaps_to_standard_value(self):
        """Test results are always standard lineweights."""
        for thickness in (0.1, 0.5, 1.0, 2.0, 3.3):
            assert snap_lineweight(thickness, 35.2778) in STANDARD_LINEWEIGHTS

    def test_nearest_value(self):
        """Test nearest standard value is selected."""
        assert snap_lineweight(1.0, 35.2778) == 35
        assert snap_lineweight(0.5, 35.2778) == 18
        assert snap_lineweight(100.0, 35.2778) == 211


class TestTranslateText:
    """Tests for translate_text function and TextLayout."""

    def test_stacked_positions(self, header):
        """Test each text is one pitch above the previous one."""
        layout = TextLayout(origin=(5.0, 10.0), line_pitch=10.0, height=2.5)
        ys = [_values(translate_text("T", i, header, layout), 20)[0] for i in range(3)]
        assert ys == [10.0, 20.0, 30.0]

    def test_text_entity_fields(self, header):
        """Test content, height, and style tags."""
        layout = TextLayout(origin=(0.0, 0.0), line_pitch=10.0, height=2.5)
        tags = translate_text("REV A", 0, header, layout)

        assert tags[0] == DXFTag(0, "TEXT")
        assert _values(tags, 1) == ["REV A"]
        assert _values(tags, 40) == [2.5]
        assert _values(tags, 7) == ["Standard"]
        assert _values(tags, 10) == [0.0]

    def test_line_breaks_collapsed(self, header):
        """Test embedded line breaks become single spaces."""
        layout = TextLayout(origin=(0.0, 0.0), line_pitch=10.0, height=2.5)
        tags = translate_text("PART\nNO.\t 42 ", 0, header, layout)
        assert _values(tags, 1) == ["PART NO. 42"]
