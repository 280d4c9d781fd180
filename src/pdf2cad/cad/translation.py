"""
Translation of primitives into DXF entity records.

Every PrimitiveKind has an entry in TRANSLATION_TABLE: either a translator
function producing the entity tags, or an Unsupported marker. Kinds with
no translation are therefore visible in one place and are reported by the
section builder instead of being dropped.

Classes:
    EntityHeader: Handle, owner and layer shared by every entity record.
    Unsupported: Marker for primitive kinds with no translation.
    TextLayout: Fixed vertical stacking of text entities.

Functions:
    translate_line: LINE element -> LINE entity.
    translate_text: String -> TEXT entity.
    snap_lineweight: Thickness -> nearest standard DXF lineweight.
    lookup_rule: Translation table lookup.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..models.primitives import PrimitiveKind, VectorElement
from ..utils.error_handlers import PrimitiveTranslationError
from ..utils.text_utils import normalize_whitespace
from .document import DXFTag

# Lineweights accepted by DXF group code 370, in hundredths of a millimetre.
STANDARD_LINEWEIGHTS: Tuple[int, ...] = (
    0, 5, 9, 13, 15, 18, 20, 25, 30, 35, 40, 50, 53,
    60, 70, 80, 90, 100, 106, 120, 140, 158, 200, 211,
)

TEXT_STYLE = "Standard"


@dataclass(frozen=True)
class EntityHeader:
    """Common fields of one entity record.

    Attributes:
        handle: Handle minted for the entity.
        owner: Handle of the owning block record (model space).
        layer: Layer name.
    """

    handle: str
    owner: str
    layer: str

    def tags(self, entity_type: str, lineweight: Optional[int] = None) -> List[DXFTag]:
        """Tags up to and including the AcDbEntity subclass data."""
        tags = [
            DXFTag(0, entity_type),
            DXFTag(5, self.handle),
            DXFTag(330, self.owner),
            DXFTag(100, "AcDbEntity"),
            DXFTag(8, self.layer),
        ]
        if lineweight is not None:
            tags.append(DXFTag(370, lineweight))
        return tags


@dataclass(frozen=True)
class Unsupported:
    """Translation table marker for a kind with no translation."""

    reason: str


@dataclass(frozen=True)
class TextLayout:
    """Vertical stacking of text entities from a fixed origin.

    Attributes:
        origin: Insertion point of the first text.
        line_pitch: Vertical distance between successive texts.
        height: Text height.
    """

    origin: Tuple[float, float]
    line_pitch: float
    height: float

    def position(self, index: int) -> Tuple[float, float]:
        """Insertion point of the index-th text entity."""
        x, y = self.origin
        return (x, y + index * self.line_pitch)


# Lineweight conversion; None disables the 370 tag.
LineweightFn = Optional[Callable[[float], Optional[int]]]
Translator = Callable[[VectorElement, EntityHeader, LineweightFn], List[DXFTag]]
TranslationRule = Union[Translator, Unsupported]


def snap_lineweight(thickness: float, scale: float) -> Optional[int]:
    """Map a thickness onto the nearest standard DXF lineweight.

    Args:
        thickness: Stroke thickness in source units.
        scale: Hundredths of a millimetre per source unit.

    Returns:
        Lineweight value, or None when thickness is not positive.
    """
    if thickness <= 0:
        return None
    target = thickness * scale
    return min(STANDARD_LINEWEIGHTS, key=lambda lw: (abs(lw - target), lw))


def translate_line(
    element: VectorElement, header: EntityHeader, lineweight: LineweightFn = None
) -> List[DXFTag]:
    """Translate a LINE element into a LINE entity in the XY plane.

    Raises:
        PrimitiveTranslationError: If the element has fewer than 4 scalars.
    """
    if len(element.points) < 4:
        raise PrimitiveTranslationError(
            f"Line needs 4 coordinate scalars, got {len(element.points)}",
            kind=element.kind.value,
        )
    x1, y1, x2, y2 = element.points[:4]
    weight = lineweight(element.thickness) if lineweight else None

    tags = header.tags("LINE", weight)
    tags.extend(
        [
            DXFTag(100, "AcDbLine"),
            DXFTag(10, x1),
            DXFTag(20, y1),
            DXFTag(30, 0.0),
            DXFTag(11, x2),
            DXFTag(21, y2),
            DXFTag(31, 0.0),
        ]
    )
    return tags


def translate_text(
    text: str, index: int, header: EntityHeader, layout: TextLayout
) -> List[DXFTag]:
    """Translate one extracted string into a TEXT entity.

    Line breaks cannot be carried by a single-line DXF value; all
    whitespace runs collapse to one space.
    """
    x, y = layout.position(index)
    tags = header.tags("TEXT")
    tags.extend(
        [
            DXFTag(100, "AcDbText"),
            DXFTag(10, x),
            DXFTag(20, y),
            DXFTag(30, 0.0),
            DXFTag(40, layout.height),
            DXFTag(1, normalize_whitespace(text)),
            DXFTag(7, TEXT_STYLE),
            DXFTag(100, "AcDbText"),
        ]
    )
    return tags


TRANSLATION_TABLE: Dict[PrimitiveKind, TranslationRule] = {
    PrimitiveKind.LINE: translate_line,
    PrimitiveKind.CURVE: Unsupported("no translation for curve primitives"),
    PrimitiveKind.CIRCLE: Unsupported("no translation for circle primitives"),
    PrimitiveKind.RECTANGLE: Unsupported("no translation for rectangle primitives"),
}


def lookup_rule(kind: PrimitiveKind) -> TranslationRule:
    """Return the translation rule for kind.

    Kinds missing from the table resolve to Unsupported.
    """
    return TRANSLATION_TABLE.get(kind, Unsupported(f"no translation rule for {kind}"))
