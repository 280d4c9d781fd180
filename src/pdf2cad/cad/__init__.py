"""DXF document assembly and encoding."""

from .document import DXFDocument, DXFTag, Section, validate_document
from .encoder import DXFEncoder
from .generator import CADGenerator, OutputFormat
from .handles import HandleAllocator, ReservedHandle
from .section_builder import SectionBuilder
from .translation import TRANSLATION_TABLE, Unsupported, lookup_rule

__all__ = [
    "DXFDocument",
    "DXFTag",
    "Section",
    "validate_document",
    "DXFEncoder",
    "CADGenerator",
    "OutputFormat",
    "HandleAllocator",
    "ReservedHandle",
    "SectionBuilder",
    "TRANSLATION_TABLE",
    "Unsupported",
    "lookup_rule",
]
