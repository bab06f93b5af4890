"""
Category Annotation Parsing

Category tokens may carry rename annotations:

    BaseName{year:NewName}{year2:NewerName}

Annotations are order-independent in the source text and are
normalized to ascending-year order.
"""

from __future__ import annotations
from typing import Optional
import re

from .events import Category, Transition


UNCATEGORIZED = "Uncategorized"

_TRANSITION = re.compile(r'\{(-?\d+):([^}]+)\}')


def parse_category_with_transitions(category: Optional[str]) -> Category:
    """Split a category token into its base name and rename transitions."""
    if not category:
        return Category(base_name=None)

    transitions = [
        Transition(year=int(match.group(1)), name=match.group(2).strip())
        for match in _TRANSITION.finditer(category)
    ]
    base_name = _TRANSITION.sub('', category).strip()

    # Stable: same-year transitions keep source order
    transitions.sort(key=lambda t: t.year)

    return Category(base_name=base_name, transitions=tuple(transitions))
