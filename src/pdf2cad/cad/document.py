"""
In-memory DXF document assembled by the section builder.

A document is an ordered list of sections, each an ordered list of
group-code/value tags. Section begin/end markers and the EOF sentinel
are structural: the encoder writes them from the section names and the
``terminated`` flag, so the builder cannot forget or duplicate them.

Classes:
    DXFTag: One group-code/value pair.
    Section: A named top-level section.
    DXFDocument: Ordered sections plus the termination flag.

Functions:
    validate_document: Check handle uniqueness and owner references.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, NamedTuple, Optional, Union

TagValue = Union[str, int, float, bool]

# Fixed top-level section order of a DXF file.
SECTION_ORDER = ("HEADER", "CLASSES", "TABLES", "BLOCKS", "ENTITIES", "OBJECTS")

# Group codes carrying an object's own handle (105 is used by DIMSTYLE records).
HANDLE_CODES = frozenset({5, 105})
OWNER_CODE = 330


class DXFTag(NamedTuple):
    """One group-code/value pair."""

    code: int
    value: TagValue


@dataclass
class Section:
    """A named top-level section and its tags.

    Attributes:
        name: Section name as written after group code 2.
        tags: Tags between the section markers, in output order.
    """

    name: str
    tags: List[DXFTag] = field(default_factory=list)

    def append(self, code: int, value: TagValue) -> int:
        """Append one tag and return its position."""
        self.tags.append(DXFTag(code, value))
        return len(self.tags) - 1

    def extend(self, tags: Iterable[DXFTag]) -> None:
        self.tags.extend(tags)

    def replace(self, position: int, value: TagValue) -> None:
        """Replace the value of the tag at position, keeping its code."""
        code = self.tags[position].code
        self.tags[position] = DXFTag(code, value)

    def records(self, record_type: str) -> List[List[DXFTag]]:
        """Split the section into records starting with ``0/record_type``.

        Each returned record contains the tags from its 0-code tag up to,
        but excluding, the next 0-code tag.
        """
        found: List[List[DXFTag]] = []
        current: Optional[List[DXFTag]] = None
        for tag in self.tags:
            if tag.code == 0:
                current = [tag] if tag.value == record_type else None
                if current is not None:
                    found.append(current)
            elif current is not None:
                current.append(tag)
        return found


@dataclass
class DXFDocument:
    """Ordered sections of one DXF file.

    Attributes:
        sections: Sections in output order.
        terminated: Whether the EOF sentinel is written. Only the final
            builder phase sets this.
    """

    sections: List[Section] = field(default_factory=list)
    terminated: bool = False

    def new_section(self, name: str) -> Section:
        """Append and return an empty section."""
        section = Section(name)
        self.sections.append(section)
        return section

    def section(self, name: str) -> Section:
        """Return the first section with the given name.

        Raises:
            KeyError: If no such section exists.
        """
        for section in self.sections:
            if section.name == name:
                return section
        raise KeyError(f"Document has no {name} section")

    @property
    def section_names(self) -> List[str]:
        return [s.name for s in self.sections]

    def iter_object_tags(self) -> Iterator[DXFTag]:
        """Tags of every section except HEADER, in output order.

        Header variables reuse object group codes ($HANDSEED uses code 5)
        without denoting objects, so they are excluded.
        """
        for section in self.sections:
            if section.name == "HEADER":
                continue
            yield from section.tags

    def handles(self) -> List[str]:
        """All object handles in output order, duplicates included."""
        return [
            str(tag.value) for tag in self.iter_object_tags() if tag.code in HANDLE_CODES
        ]


def validate_document(document: DXFDocument) -> List[str]:
    """Check the structural invariants of an assembled document.

    Checks:
        - sections appear exactly once each, in SECTION_ORDER
        - no handle is used by two objects
        - every owner reference (code 330, except the null owner "0")
          names a handle that appears earlier in the document

    Args:
        document: Document to check.

    Returns:
        List of violation messages. Empty list if the document is valid.
    """
    errors: List[str] = []

    if tuple(document.section_names) != SECTION_ORDER:
        errors.append(
            f"Section order {document.section_names} != {list(SECTION_ORDER)}"
        )

    seen: set = set()
    for tag in document.iter_object_tags():
        value = str(tag.value)
        if tag.code in HANDLE_CODES:
            if value in seen:
                errors.append(f"Duplicate handle {value}")
            seen.add(value)
        elif tag.code == OWNER_CODE and value != "0" and value not in seen:
            errors.append(f"Owner reference {value} precedes its object")

    return errors
