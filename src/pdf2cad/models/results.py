"""
Result containers returned by the assembler.

Classes:
    SkippedElement: One input element that produced no entity.
    TranslationReport: Per-document summary of the entities phase.
    GenerationResult: Outcome of one generation call.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SkippedElement:
    """An input vector element that was not translated.

    Attributes:
        index: Position of the element in the vector list.
        kind: Primitive kind name, or "unknown" if the element was malformed.
        reason: Why the element was skipped.
    """

    index: int
    kind: str
    reason: str


@dataclass
class TranslationReport:
    """Summary of what the entities phase wrote and skipped.

    Attributes:
        lines_written: Number of LINE entities emitted.
        texts_written: Number of TEXT entities emitted.
        skipped: Elements with no translation, in input order.
    """

    lines_written: int = 0
    texts_written: int = 0
    skipped: List[SkippedElement] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def entities_written(self) -> int:
        return self.lines_written + self.texts_written

    def skipped_by_kind(self) -> Dict[str, int]:
        """Count skipped elements per primitive kind."""
        return dict(Counter(s.kind for s in self.skipped))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines_written": self.lines_written,
            "texts_written": self.texts_written,
            "skipped_count": self.skipped_count,
            "skipped_by_kind": self.skipped_by_kind(),
            "skipped": [
                {"index": s.index, "kind": s.kind, "reason": s.reason}
                for s in self.skipped
            ],
        }


@dataclass
class GenerationResult:
    """Outcome of one generation call.

    Attributes:
        status: "complete" or "failed".
        output_path: Destination that was requested.
        output_format: Requested format value ("dxf", "dwg", ...).
        report: Entities phase summary. None if generation failed before
            the entities phase ran.
        error_type: Exception class name when failed.
        error_message: Error message when failed.
        error_details: Structured error information when failed.
    """

    status: str
    output_path: Optional[str]
    output_format: str
    report: Optional[TranslationReport] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == "complete"

    @property
    def skipped_elements(self) -> int:
        """Number of skipped vector elements (0 if the entities phase never ran)."""
        return self.report.skipped_count if self.report else 0

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "output_path": self.output_path,
            "output_format": self.output_format,
            "report": self.report.to_dict() if self.report else None,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "error_details": dict(self.error_details),
        }
