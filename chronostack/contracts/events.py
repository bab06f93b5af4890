"""
Event Contracts

Records that flow between the pipeline layers.

LAYER FLOW:
===========
1. Ingestion produces Event (no layer info)
2. Layering returns new Events carrying layer / layer_label / layer_transitions
3. Overlap resolution returns new Events carrying visual_start / visual_end
4. Query layer derives TimeRange, CategoryLabel, Footnote, TimeAxis

IMMUTABILITY:
=============
Every record is frozen. Enrichment never mutates; it returns a copy
with the extra fields populated.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple
from enum import Enum


# =============================================================================
# MODE ENUMS (Resolved once per batch)
# =============================================================================

class InputDialect(Enum):
    """Which grammar a raw input text is committed to."""
    COMPACT = "compact"     # Category|Entry1,Entry2 per line
    FLAT = "flat"           # Entry1,Category|Entry2 as one list


class LayoutMode(Enum):
    """Which layering strategy a batch of events uses."""
    AUTO = "auto"           # Greedy interval packing
    FIXED = "fixed"         # One layer per category


# =============================================================================
# CATEGORY TYPES
# =============================================================================

@dataclass(frozen=True)
class Transition:
    """A category rename effective from a given year."""
    year: int
    name: str

    def to_dict(self) -> dict:
        return {'year': self.year, 'name': self.name}


@dataclass(frozen=True)
class Category:
    """
    Parsed category token.

    base_name is the token with every {year:Name} annotation removed;
    transitions are sorted ascending by year.
    """
    base_name: Optional[str]
    transitions: Tuple[Transition, ...] = field(default_factory=tuple)


# =============================================================================
# EVENT
# =============================================================================

@dataclass(frozen=True)
class Event:
    """
    A named time interval.

    start/end are coordinates in the active resolution's numeric space.
    start <= end is NOT enforced; zero and negative spans pass through.
    start_str/end_str are the original tokens and take precedence
    over a decoded coordinate for display.
    """
    name: str
    start: int
    end: int
    start_str: str
    end_str: str
    category: Optional[str] = None
    note: Optional[str] = None
    note_index: Optional[int] = None

    # Set by the layering stage
    layer: Optional[int] = None
    layer_label: Optional[str] = None
    layer_transitions: Tuple[Transition, ...] = field(default_factory=tuple)

    # Set by the overlap resolver
    visual_start: Optional[float] = None
    visual_end: Optional[float] = None

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def effective_start(self) -> float:
        """Geometry start: visual position when resolved, raw otherwise."""
        return self.visual_start if self.visual_start is not None else self.start

    @property
    def effective_end(self) -> float:
        return self.visual_end if self.visual_end is not None else self.end

    def with_note_index(self, note_index: int) -> Event:
        return replace(self, note_index=note_index)

    def with_layer(
        self,
        layer: int,
        layer_label: Optional[str] = None,
        layer_transitions: Tuple[Transition, ...] = ()
    ) -> Event:
        """Return new Event placed on a layer (immutable)."""
        return replace(
            self,
            layer=layer,
            layer_label=layer_label,
            layer_transitions=tuple(layer_transitions),
        )

    def with_visual_position(self, visual_start: float, visual_end: float) -> Event:
        """Return new Event with fractional geometry (immutable)."""
        return replace(self, visual_start=visual_start, visual_end=visual_end)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'category': self.category,
            'start': self.start,
            'end': self.end,
            'start_str': self.start_str,
            'end_str': self.end_str,
            'note': self.note,
            'note_index': self.note_index,
            'layer': self.layer,
            'layer_label': self.layer_label,
            'layer_transitions': [t.to_dict() for t in self.layer_transitions],
            'visual_start': self.visual_start,
            'visual_end': self.visual_end,
        }


# =============================================================================
# DERIVED VIEWS (Query layer outputs)
# =============================================================================

@dataclass(frozen=True)
class TimeRange:
    """Numeric bounding interval over all events."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def to_dict(self) -> dict:
        return {'min': self.min, 'max': self.max}


@dataclass(frozen=True)
class CategoryLabel:
    """Label shown beside a fixed layer."""
    label: str
    transitions: Tuple[Transition, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'transitions': [t.to_dict() for t in self.transitions],
        }


@dataclass(frozen=True)
class Footnote:
    """A numbered annotation attached to an event via {note} syntax."""
    index: int
    name: str
    note: str

    def to_dict(self) -> dict:
        return {'index': self.index, 'name': self.name, 'note': self.note}


@dataclass(frozen=True)
class TimeAxis:
    """The time axis ticks for a range."""
    interval: int
    ticks: Tuple[Tuple[int, str], ...]  # (position, label)

    def to_dict(self) -> dict:
        return {
            'interval': self.interval,
            'ticks': [{'value': v, 'label': label} for v, label in self.ticks],
        }
