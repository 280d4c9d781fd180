"""
Text utilities for the pdf2cad assembler.

Provides normalization of extracted strings before they become TEXT entities.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """
    Normalize multiple spaces, tabs, newlines to single space.

    A DXF value occupies exactly one line, so page text with embedded
    line breaks must be flattened before it is written.

    Args:
        text: Input text

    Returns:
        Normalized text with single spaces
    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if code < 0x80:
        return ch
    if code > 0xFFFF:
        # \U+ takes exactly four hex digits; split into a UTF-16 surrogate pair
        code -= 0x10000
        high, low = 0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)
        return f"\\U+{high:04X}\\U+{low:04X}"
    return f"\\U+{code:04X}"


def escape_non_ascii(text: str) -> str:
    """
    Replace characters outside 7-bit ASCII with DXF unicode escapes.

    Characters beyond the Basic Multilingual Plane are written as a
    UTF-16 surrogate pair of two escapes.

    Example: "Ø25" -> "\\U+00D825"

    Args:
        text: Input text

    Returns:
        ASCII-only text
    """
    if text.isascii():
        return text
    return "".join(_escape_char(ch) for ch in text)
