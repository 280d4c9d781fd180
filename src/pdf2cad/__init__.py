"""
pdf2cad

Assembles ASCII DXF drawing files from vector primitives and text
extracted from PDF pages.
"""

__version__ = "1.0.0"
__author__ = "pdf2cad Team"

# Core exports
from .cad import CADGenerator, OutputFormat
from .models import GenerationResult, PrimitiveKind, VectorElement
from .utils import Config, GeneratorConfig

__all__ = [
    "CADGenerator",
    "OutputFormat",
    "GenerationResult",
    "PrimitiveKind",
    "VectorElement",
    "Config",
    "GeneratorConfig",
    "__version__",
]
