"""
Core Layout Engine

RESPONSIBILITY: Layer assignment and visual overlap resolution
ALLOWED INPUTS: Event lists from the ingestion layer
OUTPUTS: New Event lists carrying layer and geometry fields

WHAT THIS LAYER MUST NOT DO:
============================
- Parse text or encode time tokens
- Mutate the events it receives
- Drop events (every input event is placed)
"""

from .layering import (
    resolve_layout_mode,
    assign_auto_layers,
    assign_fixed_layers,
    assign_layers,
)
from .overlap import resolve_overlaps

__all__ = [
    'resolve_layout_mode',
    'assign_auto_layers',
    'assign_fixed_layers',
    'assign_layers',
    'resolve_overlaps',
]
