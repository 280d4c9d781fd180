"""Section Builder Module

Assembles a complete DXF (AC1015 / R2000) document from vector primitives
and extracted text. The builder runs a fixed, linear sequence of phases:

    HEADER -> CLASSES -> TABLES -> BLOCKS -> ENTITIES -> OBJECTS -> terminator

Each phase appends one section to the document. Structural records
(tables, table records, blocks, entities, the plot-style placeholder) get
handles from the allocator; the three dictionaries of the object skeleton
use reserved literal handles. Owner references (group code 330) always
point at a handle emitted earlier in the document, and the finished
document is checked with validate_document before it is returned.

Classes:
    SectionBuilder: Builds one DXFDocument.

Example:
    >>> builder = SectionBuilder(GeneratorConfig(), HandleAllocator())
    >>> document, report = builder.build([VectorElement.line(0, 0, 100, 100)], ["A"])
    >>> report.entities_written
    2
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.primitives import PrimitiveKind, coerce_texts, coerce_vector
from ..models.results import SkippedElement, TranslationReport
from ..utils.config_loader import GeneratorConfig
from ..utils.error_handlers import DocumentStructureError, PrimitiveTranslationError
from ..utils.reporting import GenerationReporter, LoggingReporter
from .document import DXFDocument, DXFTag, Section, validate_document
from .handles import HandleAllocator, ReservedHandle
from .translation import (
    TEXT_STYLE,
    EntityHeader,
    TextLayout,
    Unsupported,
    lookup_rule,
    snap_lineweight,
    translate_text,
)

logger = logging.getLogger(__name__)

ACAD_VERSION = "AC1015"
CODE_PAGE = "ANSI_1252"

MODEL_SPACE = "*Model_Space"
PAPER_SPACE = "*Paper_Space"

# Table kinds in the order AutoCAD writes them.
TABLE_ORDER = (
    "VPORT",
    "LTYPE",
    "LAYER",
    "STYLE",
    "VIEW",
    "UCS",
    "APPID",
    "DIMSTYLE",
    "BLOCK_RECORD",
)

# Subclass marker of each table's records.
_RECORD_SUBCLASS = {
    "VPORT": "AcDbViewportTableRecord",
    "LTYPE": "AcDbLinetypeTableRecord",
    "LAYER": "AcDbLayerTableRecord",
    "STYLE": "AcDbTextStyleTableRecord",
    "VIEW": "AcDbViewTableRecord",
    "UCS": "AcDbUCSTableRecord",
    "APPID": "AcDbRegAppTableRecord",
    "DIMSTYLE": "AcDbDimStyleTableRecord",
    "BLOCK_RECORD": "AcDbBlockTableRecord",
}

RecordBody = Tuple[str, List[DXFTag]]


def _tags(*pairs: Tuple[int, Any]) -> List[DXFTag]:
    return [DXFTag(code, value) for code, value in pairs]


class SectionBuilder:
    """Builds one DXF document in a fixed sequence of phases.

    A builder instance is single-use: build() may be called once. It owns
    the document being assembled but not the allocator, which the caller
    creates per generation call.

    Attributes:
        config: Generator configuration.
        allocator: Handle allocator for this document.
        reporter: Receiver of progress and skipped-element diagnostics.
        document: The document under construction.
        report: Entities phase summary.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        allocator: HandleAllocator,
        reporter: Optional[GenerationReporter] = None,
    ) -> None:
        self.config = config
        self.allocator = allocator
        self.reporter = reporter or LoggingReporter(logger)
        self.document = DXFDocument()
        self.report = TranslationReport()

        self._built = False
        self._handseed_position: Optional[int] = None
        self._table_handles: Dict[str, str] = {}
        self._record_handles: Dict[Tuple[str, str], str] = {}
        self._plot_style_handle: Optional[str] = None

        self._record_builders: Dict[str, Callable[[], List[RecordBody]]] = {
            "VPORT": self._vport_records,
            "LTYPE": self._ltype_records,
            "LAYER": self._layer_records,
            "STYLE": self._style_records,
            "VIEW": self._view_records,
            "UCS": self._ucs_records,
            "APPID": self._appid_records,
            "DIMSTYLE": self._dimstyle_records,
            "BLOCK_RECORD": self._block_record_records,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(
        self,
        vectors: Optional[Iterable[Any]] = None,
        texts: Optional[Sequence[Any]] = None,
    ) -> Tuple[DXFDocument, TranslationReport]:
        """Run all phases and return the finished document.

        Args:
            vectors: VectorElement records (or mappings). None means no vectors.
            texts: Extracted strings. None means no text.

        Returns:
            Tuple of (document, translation report).

        Raises:
            RuntimeError: If build() was already called on this instance.
            DocumentStructureError: If the assembled document violates the
                handle or owner invariants.
        """
        if self._built:
            raise RuntimeError("SectionBuilder.build() can only run once")
        self._built = True

        vector_list = list(vectors or [])
        text_list = coerce_texts(texts or [])

        self._build_header(self.document.new_section("HEADER"))
        self._build_classes(self.document.new_section("CLASSES"))
        self._build_tables(self.document.new_section("TABLES"))
        self._build_blocks(self.document.new_section("BLOCKS"))
        self._build_entities(
            self.document.new_section("ENTITIES"), vector_list, text_list
        )
        self._build_objects(self.document.new_section("OBJECTS"))
        self._terminate()

        errors = validate_document(self.document)
        if errors:
            raise DocumentStructureError(
                f"Assembled document violates {len(errors)} structural invariant(s)",
                errors=errors,
            )

        return self.document, self.report

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _build_header(self, section: Section) -> None:
        cfg = self.config
        limit_x, limit_y = cfg.limits

        section.extend(_tags((9, "$ACADVER"), (1, ACAD_VERSION)))
        section.extend(_tags((9, "$DWGCODEPAGE"), (3, CODE_PAGE)))
        section.append(9, "$HANDSEED")
        # Finalised by the terminator phase once all handles are issued.
        self._handseed_position = section.append(5, self.allocator.peek())
        section.extend(_tags((9, "$INSBASE"), (10, 0.0), (20, 0.0), (30, 0.0)))
        section.extend(_tags((9, "$EXTMIN"), (10, 0.0), (20, 0.0), (30, 0.0)))
        section.extend(_tags((9, "$EXTMAX"), (10, limit_x), (20, limit_y), (30, 0.0)))
        section.extend(_tags((9, "$LIMMIN"), (10, 0.0), (20, 0.0)))
        section.extend(_tags((9, "$LIMMAX"), (10, limit_x), (20, limit_y)))
        section.extend(_tags((9, "$TEXTSIZE"), (40, cfg.text_height)))
        section.extend(_tags((9, "$TEXTSTYLE"), (7, TEXT_STYLE)))
        section.extend(_tags((9, "$CLAYER"), (8, cfg.geometry_layer)))
        section.extend(_tags((9, "$LUNITS"), (70, 2)))
        section.extend(_tags((9, "$MEASUREMENT"), (70, 1 if cfg.metric else 0)))
        # 4 = millimetres, 1 = inches
        section.extend(_tags((9, "$INSUNITS"), (70, 4 if cfg.metric else 1)))
        section.extend(_tags((9, "$LWDISPLAY"), (290, cfg.lineweight_enabled)))

    def _build_classes(self, section: Section) -> None:
        # Required by AC1015 readers even without custom classes.
        pass

    def _build_tables(self, section: Section) -> None:
        for table in TABLE_ORDER:
            self._emit_table(section, table)

    def _build_blocks(self, section: Section) -> None:
        for name in (MODEL_SPACE, PAPER_SPACE):
            owner = self._record_handles[("BLOCK_RECORD", name)]
            paper_space = name == PAPER_SPACE

            section.extend(_tags((0, "BLOCK"), (5, self.allocator.next()), (330, owner)))
            section.append(100, "AcDbEntity")
            if paper_space:
                section.append(67, 1)
            section.extend(
                _tags(
                    (8, "0"),
                    (100, "AcDbBlockBegin"),
                    (2, name),
                    (70, 0),
                    (10, 0.0),
                    (20, 0.0),
                    (30, 0.0),
                    (3, name),
                    (1, ""),
                )
            )

            section.extend(_tags((0, "ENDBLK"), (5, self.allocator.next()), (330, owner)))
            section.append(100, "AcDbEntity")
            if paper_space:
                section.append(67, 1)
            section.extend(_tags((8, "0"), (100, "AcDbBlockEnd")))

    def _build_entities(
        self, section: Section, vectors: List[Any], texts: List[str]
    ) -> None:
        cfg = self.config
        owner = self._record_handles[("BLOCK_RECORD", MODEL_SPACE)]
        lineweight = (
            partial(snap_lineweight, scale=cfg.lineweight_scale)
            if cfg.lineweight_enabled
            else None
        )

        self.reporter.info(f"Writing {len(vectors)} vector elements")
        for index, item in enumerate(vectors):
            try:
                element = coerce_vector(item)
            except ValueError as e:
                self._skip(index, "unknown", str(e))
                continue

            rule = lookup_rule(element.kind)
            if isinstance(rule, Unsupported):
                self._skip(index, element.kind.value, rule.reason)
                continue

            header = EntityHeader(self.allocator.next(), owner, cfg.geometry_layer)
            try:
                tags = rule(element, header, lineweight)
            except PrimitiveTranslationError as e:
                self._skip(index, element.kind.value, e.message)
                continue

            section.extend(tags)
            if element.kind is PrimitiveKind.LINE:
                self.report.lines_written += 1

        layout = TextLayout(cfg.text_origin, cfg.text_line_pitch, cfg.text_height)
        self.reporter.info(f"Writing {len(texts)} text elements")
        for index, text in enumerate(texts):
            header = EntityHeader(self.allocator.next(), owner, cfg.text_layer)
            section.extend(translate_text(text, index, header, layout))
            self.report.texts_written += 1

        if self.report.skipped_count:
            self.reporter.warning(
                f"Skipped {self.report.skipped_count} vector element(s): "
                f"{self.report.skipped_by_kind()}"
            )

    def _build_objects(self, section: Section) -> None:
        root = ReservedHandle.ROOT_DICTIONARY.handle
        groups = ReservedHandle.GROUP_DICTIONARY.handle
        plot_styles = ReservedHandle.PLOT_STYLE_DICTIONARY.handle
        placeholder = self._plot_style()

        section.extend(
            _tags(
                (0, "DICTIONARY"),
                (5, root),
                (330, "0"),
                (100, "AcDbDictionary"),
                (281, 1),
                (3, "ACAD_GROUP"),
                (350, groups),
                (3, "ACAD_PLOTSTYLENAME"),
                (350, plot_styles),
            )
        )
        section.extend(
            _tags(
                (0, "DICTIONARY"),
                (5, groups),
                (102, "{ACAD_REACTORS"),
                (330, root),
                (102, "}"),
                (330, root),
                (100, "AcDbDictionary"),
                (281, 1),
            )
        )
        section.extend(
            _tags(
                (0, "ACDBDICTIONARYWDFLT"),
                (5, plot_styles),
                (102, "{ACAD_REACTORS"),
                (330, root),
                (102, "}"),
                (330, root),
                (100, "AcDbDictionary"),
                (281, 1),
                (3, "Normal"),
                (350, placeholder),
                (100, "AcDbDictionaryWithDefault"),
                (340, placeholder),
            )
        )
        section.extend(
            _tags(
                (0, "ACDBPLACEHOLDER"),
                (5, placeholder),
                (102, "{ACAD_REACTORS"),
                (330, plot_styles),
                (102, "}"),
                (330, plot_styles),
            )
        )

    def _terminate(self) -> None:
        header = self.document.section("HEADER")
        header.replace(self._handseed_position, self.allocator.peek())
        self.document.terminated = True

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _emit_table(self, section: Section, table: str) -> None:
        table_handle = self.allocator.next()
        self._table_handles[table] = table_handle
        records = self._record_builders[table]()

        section.extend(
            _tags(
                (0, "TABLE"),
                (2, table),
                (5, table_handle),
                (330, "0"),
                (100, "AcDbSymbolTable"),
                (70, len(records)),
            )
        )
        if table == "DIMSTYLE":
            section.extend(_tags((100, "AcDbDimStyleTable"), (71, 0)))

        handle_code = 105 if table == "DIMSTYLE" else 5
        for name, body in records:
            record_handle = self._record_handles[(table, name)]
            section.extend(
                _tags(
                    (0, table),
                    (handle_code, record_handle),
                    (330, table_handle),
                    (100, "AcDbSymbolTableRecord"),
                    (100, _RECORD_SUBCLASS[table]),
                )
            )
            section.extend(body)

        section.append(0, "ENDTAB")

    def _record(self, table: str, name: str, *pairs: Tuple[int, Any]) -> RecordBody:
        """Mint the handle of one table record and return its body."""
        self._record_handles[(table, name)] = self.allocator.next()
        return name, _tags((2, name), (70, 0), *pairs)

    def _plot_style(self) -> str:
        """Handle of the default plot-style placeholder, minted on first use."""
        if self._plot_style_handle is None:
            self._plot_style_handle = self.allocator.next()
        return self._plot_style_handle

    def _vport_records(self) -> List[RecordBody]:
        limit_x, limit_y = self.config.limits
        return [
            self._record(
                "VPORT",
                "*ACTIVE",
                (10, 0.0), (20, 0.0),
                (11, 1.0), (21, 1.0),
                (12, limit_x / 2), (22, limit_y / 2),
                (13, 0.0), (23, 0.0),
                (14, 10.0), (24, 10.0),
                (15, 10.0), (25, 10.0),
                (16, 0.0), (26, 0.0), (36, 1.0),
                (17, 0.0), (27, 0.0), (37, 0.0),
                (40, limit_y),
                (41, limit_x / limit_y),
                (42, 50.0),
                (43, 0.0), (44, 0.0),
                (50, 0.0), (51, 0.0),
                (71, 0), (72, 100), (73, 1), (74, 3),
                (75, 0), (76, 0), (77, 0), (78, 0),
            )
        ]

    def _ltype_records(self) -> List[RecordBody]:
        return [
            self._record(
                "LTYPE", name, (3, description), (72, 65), (73, 0), (40, 0.0)
            )
            for name, description in (
                ("ByBlock", ""),
                ("ByLayer", ""),
                ("Continuous", "Solid line"),
            )
        ]

    def _layer_records(self) -> List[RecordBody]:
        return [
            self._record(
                "LAYER",
                name,
                (62, 7),
                (6, "Continuous"),
                (370, -3),  # default lineweight
                (390, self._plot_style()),
            )
            for name in self.config.layers
        ]

    def _style_records(self) -> List[RecordBody]:
        return [
            self._record(
                "STYLE",
                TEXT_STYLE,
                (40, 0.0),
                (41, 1.0),
                (50, 0.0),
                (71, 0),
                (42, self.config.text_height),
                (3, "txt"),
                (4, ""),
            )
        ]

    def _view_records(self) -> List[RecordBody]:
        limit_x, limit_y = self.config.limits
        return [
            self._record(
                "VIEW",
                "PAGE",
                (40, limit_y),
                (10, limit_x / 2), (20, limit_y / 2),
                (41, limit_x),
                (11, 0.0), (21, 0.0), (31, 1.0),
                (12, 0.0), (22, 0.0), (32, 0.0),
                (42, 50.0), (43, 0.0), (44, 0.0),
                (50, 0.0),
                (71, 0),
            )
        ]

    def _ucs_records(self) -> List[RecordBody]:
        return [
            self._record(
                "UCS",
                "WORLD",
                (10, 0.0), (20, 0.0), (30, 0.0),
                (11, 1.0), (21, 0.0), (31, 0.0),
                (12, 0.0), (22, 1.0), (32, 0.0),
            )
        ]

    def _appid_records(self) -> List[RecordBody]:
        return [self._record("APPID", "ACAD")]

    def _dimstyle_records(self) -> List[RecordBody]:
        text_height = self.config.text_height
        return [
            self._record(
                "DIMSTYLE",
                TEXT_STYLE,
                (3, ""),
                (4, ""),
                (40, 1.0),
                (41, text_height),
                (42, 0.625),
                (43, 3.75),
                (44, 1.25),
                (140, text_height),
                (141, 2.5),
                (147, 0.625),
                (340, self._record_handles[("STYLE", TEXT_STYLE)]),
            )
        ]

    def _block_record_records(self) -> List[RecordBody]:
        records = []
        for name in (MODEL_SPACE, PAPER_SPACE):
            self._record_handles[("BLOCK_RECORD", name)] = self.allocator.next()
            records.append((name, _tags((2, name))))
        return records

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _skip(self, index: int, kind: str, reason: str) -> None:
        self.report.skipped.append(SkippedElement(index, kind, reason))
        self.reporter.skipped(index, kind, reason)

    @property
    def table_handles(self) -> Dict[str, str]:
        """Handle of each emitted table, keyed by table kind."""
        return dict(self._table_handles)
