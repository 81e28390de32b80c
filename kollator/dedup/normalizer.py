"""
Text normalization for block comparison.

Normalized text only feeds similarity scoring; the raw block content is always
what gets emitted.
"""

import re
from typing import List, Optional

__all__ = ["normalize_text", "extract_title", "tokenize"]


_HEADING_MARKER = re.compile(r"^\s{0,3}#{1,6}(?=\s|$)")
_CLOSING_HASHES = re.compile(r"\s+#+\s*$")
_LIST_MARKER = re.compile(r"^\s*(?:[-*+]|\d{1,9}[.)])\s+")
_QUOTE_MARKER = re.compile(r"^\s*(?:>\s?)+")
_WHITESPACE = re.compile(r"\s+")
_TITLE_LINE = re.compile(r"^\s{0,3}#{1,6}\s+\S")


def _strip_line(line: str) -> str:
    line = _QUOTE_MARKER.sub("", line)
    if _HEADING_MARKER.match(line):
        line = _HEADING_MARKER.sub("", line)
        line = _CLOSING_HASHES.sub("", line)
    line = _LIST_MARKER.sub("", line)
    return line


def normalize_text(text: Optional[str]) -> str:
    """Normalize raw block text for comparison.

    - Drop blockquote markers, heading ``#`` markers and list markers.
    - Remove backticks.
    - Collapse all whitespace runs to a single space, trim and lower-case.

    Never raises: ``None`` or empty input normalizes to ``""``.
    """
    if not text:
        return ""

    lines = [_strip_line(line) for line in str(text).splitlines()]
    joined = "\n".join(lines).replace("`", "")
    return _WHITESPACE.sub(" ", joined).strip().lower()


def extract_title(text: Optional[str]) -> Optional[str]:
    """Return the first '#'-prefixed heading line of a block, stripped."""
    if not text:
        return None

    for line in str(text).splitlines():
        if _TITLE_LINE.match(line):
            return line.strip()
    return None


def tokenize(normalized: str) -> List[str]:
    return normalized.split()
