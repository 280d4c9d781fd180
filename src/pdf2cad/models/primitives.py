"""
Primitive model shared between the extraction collaborator and the assembler.

The collaborator hands over a flat list of VectorElement records and a
list of text strings. The assembler never sees how they were obtained.

Classes:
    PrimitiveKind: Enum of the geometric primitive kinds.
    VectorElement: Immutable typed vector primitive.

Type aliases:
    TextElement: A plain extracted string with no geometry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Sequence, Tuple, Union

import numpy as np

TextElement = str


class PrimitiveKind(Enum):
    """Kinds of vector primitive produced by the extraction collaborator."""

    LINE = "line"
    CURVE = "curve"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"

    @classmethod
    def coerce(cls, value: Union["PrimitiveKind", str]) -> "PrimitiveKind":
        """Return the kind for an enum member or a case-insensitive name.

        Raises:
            ValueError: If the value names no known kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown primitive kind: {value!r}")


@dataclass(frozen=True)
class VectorElement:
    """A typed vector primitive.

    Attributes:
        kind: Primitive kind.
        points: Ordered coordinate scalars. Interpretation depends on kind;
            a LINE uses (x1, y1, x2, y2).
        thickness: Stroke thickness in source units (PDF points).

    Raises:
        ValueError: If points are not a flat sequence of finite numbers or
            thickness is negative.

    Example:
        >>> line = VectorElement.line(0, 0, 100, 100)
        >>> line.point_pairs()
        [(0.0, 0.0), (100.0, 100.0)]
    """

    kind: PrimitiveKind
    points: Tuple[float, ...]
    thickness: float = 1.0

    def __post_init__(self) -> None:
        """Coerce kind and points, then validate them."""
        object.__setattr__(self, "kind", PrimitiveKind.coerce(self.kind))

        try:
            coords = np.asarray(self.points, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Points must be numeric, got {self.points!r}") from e

        if coords.ndim != 1:
            raise ValueError(
                f"Points must be a flat sequence of scalars, got shape {coords.shape}"
            )
        if not np.all(np.isfinite(coords)):
            raise ValueError("Points must be finite numbers")
        object.__setattr__(self, "points", tuple(coords.tolist()))

        try:
            thickness = float(self.thickness)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Thickness must be numeric, got {self.thickness!r}") from e
        if not np.isfinite(thickness) or thickness < 0:
            raise ValueError(f"Thickness must be non-negative, got {self.thickness}")
        object.__setattr__(self, "thickness", thickness)

    @classmethod
    def line(
        cls, x1: float, y1: float, x2: float, y2: float, thickness: float = 1.0
    ) -> "VectorElement":
        """Create a LINE element from its start and end coordinates."""
        return cls(PrimitiveKind.LINE, (x1, y1, x2, y2), thickness)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VectorElement":
        """Create an element from a mapping.

        Accepts the keys ``kind`` (or ``type``), ``points`` and optional
        ``thickness``.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        kind = data.get("kind", data.get("type"))
        if kind is None:
            raise ValueError("Vector element mapping has no 'kind'")
        if "points" not in data:
            raise ValueError("Vector element mapping has no 'points'")
        return cls(kind, data["points"], data.get("thickness", 1.0))

    def point_pairs(self) -> List[Tuple[float, float]]:
        """Group the coordinate scalars into (x, y) pairs.

        A trailing unpaired scalar is ignored.
        """
        pts = self.points
        return [(pts[i], pts[i + 1]) for i in range(0, len(pts) - 1, 2)]

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "points": list(self.points),
            "thickness": self.thickness,
        }


def coerce_vector(item: Union[VectorElement, Mapping[str, Any]]) -> VectorElement:
    """Return item as a VectorElement.

    Raises:
        ValueError: If item is neither a VectorElement nor a valid mapping.
    """
    if isinstance(item, VectorElement):
        return item
    if isinstance(item, Mapping):
        return VectorElement.from_dict(item)
    raise ValueError(f"Unsupported vector element type: {type(item).__name__}")


def coerce_texts(texts: Sequence[Any]) -> List[TextElement]:
    """Convert extracted text items to strings, preserving order."""
    return [t if isinstance(t, str) else str(t) for t in texts]
