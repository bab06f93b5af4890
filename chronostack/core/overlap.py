"""
Overlap Resolver
================

Subdivides discrete time units shared by several events on one layer,
so events that are indistinguishable at the active resolution stay
visually separable.

ALGORITHM (per layer):
======================
1. Every event covers the units floor(start)..floor(end) inclusive;
   only boundary units (some event's floor(start) or floor(end)) are
   materialised
2. Per unit, members are ordered by (start, duration)
3. visual_start = start_unit + k / n      (k, n from the start unit)
   visual_end   = end_unit + (k' + 1) / n' (k', n' from the end unit)

Interior units of a multi-unit event keep their full width; only the
first and last units are shared out.

Example on one layer, year resolution:
    A(760-760), B(760-760), C(760-761), D(761-762)
    unit 760 -> [A, B, C], unit 761 -> [C, D]
    C spans 760 + 2/3 .. 761 + 1/2
"""

from __future__ import annotations
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple
import math

from ..contracts.events import Event


def _unit_span(event: Event) -> Tuple[int, int]:
    return math.floor(event.start), math.floor(event.end)


def _covers(span: Tuple[int, int], unit: int) -> bool:
    start_unit, end_unit = span
    if end_unit >= start_unit:
        return start_unit <= unit <= end_unit
    # Inverted span: registered only at its two boundary units
    return unit == start_unit or unit == end_unit


def _resolve_layer(members: List[Event]) -> List[Event]:
    spans = [_unit_span(event) for event in members]

    # Only boundary units are ever read back, so interior units are skipped
    boundaries = {unit for span in spans for unit in span}

    positions: Dict[int, Dict[int, int]] = {}
    for unit in boundaries:
        ordered = sorted(
            (i for i, span in enumerate(spans) if _covers(span, unit)),
            key=lambda i: (members[i].start, members[i].duration)
        )
        positions[unit] = {member: rank for rank, member in enumerate(ordered)}

    resolved = []
    for index, event in enumerate(members):
        start_unit, end_unit = spans[index]

        start_slots = positions[start_unit]
        end_slots = positions[end_unit]

        visual_start = start_unit + start_slots[index] / len(start_slots)
        visual_end = end_unit + (end_slots[index] + 1) / len(end_slots)
        resolved.append(event.with_visual_position(visual_start, visual_end))

    return resolved


def resolve_overlaps(events: List[Event]) -> List[Event]:
    """
    Add visual_start / visual_end to every event.

    Output is grouped by ascending layer; within a layer the input
    order is preserved.
    """
    if not events:
        return []

    layers: Dict[Optional[int], List[Event]] = OrderedDict()
    for event in events:
        layers.setdefault(event.layer, []).append(event)

    ordered_layers = sorted(
        layers.items(),
        key=lambda item: -1 if item[0] is None else item[0]
    )

    result = []
    for _, members in ordered_layers:
        result.extend(_resolve_layer(members))
    return result
