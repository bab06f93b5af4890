"""
Entry Parser
============

Turns raw timeline text into a flat, unordered list of Events.

GRAMMAR:
========
Per entry:   Name:Start - End{optional note}
Compact:     one line per category, "Category|Entry1,Entry2,..."
Flat:        the whole text is one list, "Entry1,Category|Entry2,..."

GUARANTEES:
- Total: any input (including None or non-strings) yields a list
- Every entry is either parsed or recorded as a rejection
- Rejections never reach the caller of parse(); they are diagnostics only
- note_index runs 1..k in encounter order
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
import re

from ..contracts.base import Resolution, Error, ErrorCode
from ..contracts.events import Event, InputDialect
from ..temporal.codec import encode, is_valid
from ..observability import get_logger
from .dialect import (
    CATEGORY_SEPARATOR, ENTRY_SEPARATOR, classify_dialect, split_lines
)


logger = get_logger(__name__)

# Preferred: separator with whitespace on both sides, so "2020-01 - 2021-12"
# splits at the spaced dash rather than inside the start token.
_SPACED_ENTRY = re.compile(r'^(.+?):(.+?)\s+-\s+([^{]+?)(?:\{(.+?)\})?$')
_ENTRY = re.compile(r'^(.+?):(.+?)\s*-\s*([^{]+?)(?:\{(.+?)\})?$')


@dataclass(frozen=True)
class ParseReport:
    """Parsed events plus a record of everything that was omitted."""
    events: Tuple[Event, ...]
    dialect: InputDialect
    rejections: Tuple[Error, ...] = field(default_factory=tuple)

    @property
    def dropped_count(self) -> int:
        return len(self.rejections)


# =============================================================================
# ENTRY LEVEL
# =============================================================================

def _reject(code: ErrorCode, message: str, entry: str) -> Error:
    error = Error(code=code, message=message).with_context("entry", entry)
    logger.debug("Dropped entry %r: %s", entry, message)
    return error


def _match_entry(entry: str) -> Optional[re.Match]:
    return _SPACED_ENTRY.match(entry) or _ENTRY.match(entry)


def parse_entry(
    entry: str,
    category: Optional[str],
    resolution: Resolution
) -> Union[Event, Error]:
    """Parse one "Name:Start - End{note}" entry, or explain why not."""
    match = _match_entry(entry)
    if match is None:
        return _reject(ErrorCode.MALFORMED_ENTRY, "entry does not match Name:Start - End", entry)

    raw_name, raw_start, raw_end, raw_note = match.groups()
    name = raw_name.strip()
    if not name:
        return _reject(ErrorCode.EMPTY_NAME, "entry name is empty", entry)

    start_str = raw_start.strip()
    end_str = raw_end.strip()
    start = encode(start_str, resolution)
    end = encode(end_str, resolution)

    for token, value in ((start_str, start), (end_str, end)):
        if not is_valid(value):
            return _reject(
                ErrorCode.UNENCODABLE_TIME,
                f"time token is not a valid {resolution.value}",
                entry,
            ).with_context("token", token)

    note = raw_note.strip() if raw_note else None

    return Event(
        name=name,
        category=category,
        start=start,
        end=end,
        start_str=start_str,
        end_str=end_str,
        note=note or None,
    )


def _split_category(fragment: str) -> Tuple[Optional[str], str]:
    if CATEGORY_SEPARATOR not in fragment:
        return None, fragment
    category, rest = fragment.split(CATEGORY_SEPARATOR, 1)
    return category.strip(), rest.strip()


def _split_entries(text: str) -> List[str]:
    return [e.strip() for e in text.split(ENTRY_SEPARATOR) if e.strip()]


# =============================================================================
# DIALECT LEVEL
# =============================================================================

def _iter_compact(text: str):
    for line in split_lines(text):
        category, entries = _split_category(line)
        for entry in _split_entries(entries):
            yield category, entry


def _iter_flat(text: str):
    for fragment in _split_entries(text):
        category, entry = _split_category(fragment)
        yield category, entry


def _assign_note_indices(events: List[Event]) -> List[Event]:
    """Number noted events 1..k in the order they appear."""
    numbered = []
    next_index = 1
    for event in events:
        if event.note:
            numbered.append(event.with_note_index(next_index))
            next_index += 1
        else:
            numbered.append(event)
    return numbered


def parse_with_report(
    text: object,
    resolution: Union[Resolution, str] = Resolution.YEAR
) -> ParseReport:
    """
    Parse raw text, keeping a record of rejected fragments.

    The dialect is classified once for the whole text and every entry
    is then parsed under that dialect.
    """
    resolution = Resolution.parse(resolution)

    if not isinstance(text, str) or not text.strip():
        return ParseReport(
            events=(),
            dialect=InputDialect.FLAT,
            rejections=(Error(code=ErrorCode.EMPTY_INPUT, message="input is empty"),),
        )

    dialect = classify_dialect(text)
    pairs = _iter_compact(text) if dialect is InputDialect.COMPACT else _iter_flat(text)

    events: List[Event] = []
    rejections: List[Error] = []
    for category, entry in pairs:
        result = parse_entry(entry, category, resolution)
        if isinstance(result, Error):
            rejections.append(result)
        else:
            events.append(result)

    if rejections:
        logger.debug(
            "Parsed %d events (%s dialect), dropped %d entries",
            len(events), dialect.value, len(rejections)
        )

    return ParseReport(
        events=tuple(_assign_note_indices(events)),
        dialect=dialect,
        rejections=tuple(rejections),
    )


def parse(
    text: object,
    resolution: Union[Resolution, str] = Resolution.YEAR
) -> List[Event]:
    """Parse raw text into events; malformed fragments are omitted silently."""
    return list(parse_with_report(text, resolution).events)
