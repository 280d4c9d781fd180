"""
Handle allocation for DXF documents.

Every referenceable object in a DXF file carries a hexadecimal handle.
Two ranges exist: a small reserved range holding the literal handles of
the fixed object skeleton (root dictionary and its named sub-dictionaries)
and the allocator range, which starts at the seed and only grows.

Classes:
    ReservedHandle: Literal handles of the object skeleton.
    HandleAllocator: Issues unique handles for one document.

Functions:
    format_handle: Format an integer handle value.
"""

from enum import IntEnum

# Values 0x1 .. RESERVED_CEILING are never issued by an allocator.
RESERVED_CEILING = 0x1F
DEFAULT_HANDLE_SEED = RESERVED_CEILING + 1


class ReservedHandle(IntEnum):
    """Literal handles used by the Objects section skeleton."""

    ROOT_DICTIONARY = 0xC
    GROUP_DICTIONARY = 0xD
    PLOT_STYLE_DICTIONARY = 0xE

    @property
    def handle(self) -> str:
        return format_handle(self.value)


def format_handle(value: int) -> str:
    """Format an integer handle as DXF expects it (uppercase hex, no prefix)."""
    return f"{value:X}"


class HandleAllocator:
    """Monotonic handle allocator scoped to one generated document.

    Attributes:
        seed: First value issued.

    Raises:
        ValueError: If the seed lies inside the reserved range.

    Example:
        >>> allocator = HandleAllocator()
        >>> allocator.next()
        '20'
        >>> allocator.next()
        '21'
    """

    def __init__(self, seed: int = DEFAULT_HANDLE_SEED) -> None:
        if seed <= RESERVED_CEILING:
            raise ValueError(
                f"Handle seed {seed:#x} overlaps the reserved range "
                f"(<= {RESERVED_CEILING:#x})"
            )
        self.seed = seed
        self._next_value = seed

    def next(self) -> str:
        """Issue a handle that has not been issued before."""
        value = self._next_value
        self._next_value += 1
        return format_handle(value)

    def peek(self) -> str:
        """Return the handle the next call to next() will issue."""
        return format_handle(self._next_value)

    @property
    def issued_count(self) -> int:
        return self._next_value - self.seed

    @staticmethod
    def is_reserved(handle: str) -> bool:
        """Whether handle belongs to the reserved range."""
        return 0 < int(handle, 16) <= RESERVED_CEILING
