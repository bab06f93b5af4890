"""
Contract Types

Immutable records shared by every layer. Layers import from here,
never from each other's implementations.
"""

from .base import Resolution, ErrorCode, Error
from .categories import UNCATEGORIZED, parse_category_with_transitions
from .events import (
    InputDialect,
    LayoutMode,
    Transition,
    Category,
    Event,
    TimeRange,
    CategoryLabel,
    Footnote,
    TimeAxis,
)

__all__ = [
    # Base
    'Resolution',
    'ErrorCode',
    'Error',
    # Categories
    'UNCATEGORIZED',
    'parse_category_with_transitions',
    # Modes
    'InputDialect',
    'LayoutMode',
    # Records
    'Transition',
    'Category',
    'Event',
    'TimeRange',
    'CategoryLabel',
    'Footnote',
    'TimeAxis',
]
