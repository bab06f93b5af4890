"""
Query & Analysis Interfaces

RESPONSIBILITY: Read-only derivations over processed events
ALLOWED INPUTS: Event lists after layering / overlap resolution
OUTPUTS: TimeRange, CategoryLabel map, Footnote list, TimeAxis

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate or reorder the events it reads
- Fail on an empty list (defined defaults are returned instead)
"""

from __future__ import annotations
from typing import Dict, List
import math

from ..contracts.base import Resolution
from ..contracts.events import CategoryLabel, Event, Footnote, TimeAxis, TimeRange
from ..temporal.codec import decode


DEFAULT_TIME_RANGE = TimeRange(min=0, max=100)
DEFAULT_TICK_TARGET = 10


def time_range(events: List[Event]) -> TimeRange:
    """
    Bounds over visual positions (raw coordinates where unresolved).

    Run after overlap resolution so fractional bounds are reflected.
    """
    if not events:
        return DEFAULT_TIME_RANGE
    return TimeRange(
        min=min(event.effective_start for event in events),
        max=max(event.effective_end for event in events),
    )


def category_labels(events: List[Event]) -> Dict[int, CategoryLabel]:
    """First label seen per layer, in scan order."""
    labels: Dict[int, CategoryLabel] = {}
    for event in events:
        if event.layer_label and event.layer not in labels:
            labels[event.layer] = CategoryLabel(
                label=event.layer_label,
                transitions=event.layer_transitions,
            )
    return labels


def footnotes(events: List[Event]) -> List[Footnote]:
    notes = [
        Footnote(index=event.note_index, name=event.name, note=event.note)
        for event in events
        if event.note and event.note_index
    ]
    return sorted(notes, key=lambda footnote: footnote.index)


def layer_count(events: List[Event]) -> int:
    layers = [event.layer for event in events if event.layer is not None]
    return max(layers) + 1 if layers else 0


def label_at(label: CategoryLabel, year: int) -> str:
    """Name of a fixed layer in force at a given year."""
    current = label.label
    for transition in label.transitions:
        if transition.year > year:
            break
        current = transition.name
    return current


def axis_ticks(
    bounds: TimeRange,
    resolution: Resolution,
    target: int = DEFAULT_TICK_TARGET
) -> TimeAxis:
    """
    Evenly spaced integer ticks covering a range.

    Interval is max(1, ceil(span / target)); ticks sit on multiples of
    the interval from the first one >= min up to max inclusive.
    """
    target = max(1, target)
    interval = max(1, math.ceil(bounds.span / target))
    ticks = []
    tick = math.ceil(bounds.min / interval) * interval
    while tick <= bounds.max:
        ticks.append((tick, decode(tick, resolution)))
        tick += interval
    return TimeAxis(interval=interval, ticks=tuple(ticks))


__all__ = [
    'DEFAULT_TIME_RANGE',
    'time_range',
    'category_labels',
    'footnotes',
    'layer_count',
    'label_at',
    'axis_ticks',
]
