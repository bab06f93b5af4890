"""
ChronoStack

Turns compact interval notation ("Name:Start - End") into layered,
overlap-resolved events ready for axis-based rendering.
"""

from .contracts import (
    Resolution,
    Event,
    TimeRange,
    CategoryLabel,
    Footnote,
    LayoutMode,
    InputDialect,
)
from .temporal import encode, decode
from .ingestion import parse, parse_with_report
from .core import assign_layers, resolve_overlaps
from .query import time_range, category_labels, footnotes
from .engine import EngineConfig, LayoutCache, TimelineEngine, TimelineLayout, process_events

__version__ = "0.1.0"

__all__ = [
    'Resolution',
    'Event',
    'TimeRange',
    'CategoryLabel',
    'Footnote',
    'LayoutMode',
    'InputDialect',
    'encode',
    'decode',
    'parse',
    'parse_with_report',
    'assign_layers',
    'resolve_overlaps',
    'time_range',
    'category_labels',
    'footnotes',
    'EngineConfig',
    'LayoutCache',
    'TimelineEngine',
    'TimelineLayout',
    'process_events',
]
