"""
Dialect Classifier

Decides, for a whole input text, which grammar it is written in.
Detection is a property of the whole text, never per line: a single
input commits to one dialect before any entry is parsed.
"""

from __future__ import annotations
from typing import List

from ..contracts.events import InputDialect


CATEGORY_SEPARATOR = "|"
ENTRY_SEPARATOR = ","


def split_lines(text: str) -> List[str]:
    """Non-empty, trimmed lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def _is_compact_line(line: str) -> bool:
    # Compact: "Category|E1,E2" - only the category prefix carries a pipe
    if CATEGORY_SEPARATOR not in line:
        return False
    after_pipe = line.split(CATEGORY_SEPARATOR, 1)[1]
    entries = after_pipe.split(ENTRY_SEPARATOR)
    # A single entry after the pipe is ambiguous ("A:1 - 2,Cat|B:3 - 4")
    if len(entries) < 2:
        return False
    return all(CATEGORY_SEPARATOR not in entry for entry in entries[1:])


def classify_dialect(text: str) -> InputDialect:
    """
    COMPACT if at least one line has a category prefix followed by two
    or more entries that carry no pipes of their own; FLAT otherwise.
    """
    if any(_is_compact_line(line) for line in split_lines(text)):
        return InputDialect.COMPACT
    return InputDialect.FLAT
