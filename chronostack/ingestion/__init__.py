"""
Ingestion Layer

RESPONSIBILITY: Raw timeline text -> unordered Event list
ALLOWED INPUTS: Any object (non-strings yield an empty list)
OUTPUTS: Event records with no layer or geometry information

WHAT THIS LAYER MUST NOT DO:
============================
- Assign layers or visual positions
- Sort events by time
- Raise for malformed input (omit, and record the reason)
"""

from .dialect import classify_dialect
from ..contracts.categories import UNCATEGORIZED, parse_category_with_transitions
from .parser import ParseReport, parse, parse_with_report, parse_entry

__all__ = [
    'classify_dialect',
    'UNCATEGORIZED',
    'parse_category_with_transitions',
    'ParseReport',
    'parse',
    'parse_with_report',
    'parse_entry',
]
