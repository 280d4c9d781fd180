"""Data structures exchanged with the assembler."""

from .primitives import (
    PrimitiveKind,
    TextElement,
    VectorElement,
    coerce_texts,
    coerce_vector,
)
from .results import GenerationResult, SkippedElement, TranslationReport

__all__ = [
    "PrimitiveKind",
    "TextElement",
    "VectorElement",
    "coerce_texts",
    "coerce_vector",
    "GenerationResult",
    "SkippedElement",
    "TranslationReport",
]
