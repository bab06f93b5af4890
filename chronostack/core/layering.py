"""
Layer Assigner
==============

Annotates each event with a layer (lane) index.

MODES:
======
1. AUTO:  no event has a category -> greedy interval packing
2. FIXED: any event has a category -> one layer per category

The mode is resolved once per batch and dispatched to one of two pure
strategy functions sharing the contract List[Event] -> List[Event].

INVARIANTS:
===========
- AUTO:  two events on one layer never overlap (a.end <= b.start)
- FIXED: layer is a function of the raw category string only
- Inputs are never mutated; new Events are returned
"""

from __future__ import annotations
from typing import Callable, Dict, List

from ..contracts.events import Category, Event, LayoutMode
from ..contracts.categories import UNCATEGORIZED, parse_category_with_transitions


def _time_order(event: Event):
    return (event.start, event.end)


def resolve_layout_mode(events: List[Event]) -> LayoutMode:
    """FIXED if any event carries a category (even an empty one)."""
    if any(event.category is not None for event in events):
        return LayoutMode.FIXED
    return LayoutMode.AUTO


# =============================================================================
# STRATEGIES
# =============================================================================

def assign_auto_layers(events: List[Event]) -> List[Event]:
    """
    Greedy interval packing.

    Events are visited by (start, end); each goes onto the first layer
    whose last event ends no later than it starts, else onto a new
    layer. Output is flattened layer by layer.
    """
    layers: List[List[Event]] = []

    for event in sorted(events, key=_time_order):
        for index, layer in enumerate(layers):
            if layer[-1].end <= event.start:
                layer.append(event.with_layer(index))
                break
        else:
            layers.append([event.with_layer(len(layers))])

    return [event for layer in layers for event in layer]


def assign_fixed_layers(events: List[Event]) -> List[Event]:
    """
    One dedicated layer per raw category string.

    Layer order is first-seen category order. Events with no category
    share the synthetic "Uncategorized" layer.
    """
    groups: Dict[str, List[Event]] = {}
    parsed: Dict[str, Category] = {}

    for event in events:
        key = event.category or UNCATEGORIZED
        if key not in groups:
            groups[key] = []
            parsed[key] = parse_category_with_transitions(key)
        groups[key].append(event)

    result = []
    for layer_index, (key, members) in enumerate(groups.items()):
        category = parsed[key]
        for event in sorted(members, key=_time_order):
            result.append(event.with_layer(
                layer_index,
                layer_label=category.base_name,
                layer_transitions=category.transitions,
            ))

    return result


_STRATEGIES: Dict[LayoutMode, Callable[[List[Event]], List[Event]]] = {
    LayoutMode.AUTO: assign_auto_layers,
    LayoutMode.FIXED: assign_fixed_layers,
}


def assign_layers(events: List[Event]) -> List[Event]:
    """Resolve the layout mode for the batch and apply its strategy."""
    if not events:
        return []
    return _STRATEGIES[resolve_layout_mode(events)](list(events))
