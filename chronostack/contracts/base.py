"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses or enums
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union
from enum import Enum, auto


# =============================================================================
# RESOLUTION (Granularity of time tokens)
# =============================================================================

class Resolution(Enum):
    """
    Granularity of time tokens.

    The resolution decides how a textual token maps onto the
    signed integer coordinate space used by every later stage.
    """
    YEAR = "year"
    MONTH = "month"
    DAY = "day"

    @classmethod
    def parse(cls, value: Union[str, 'Resolution']) -> 'Resolution':
        """
        Resolve a resolution from its name.

        Raises ValueError for unknown names. Only outer surfaces
        (CLI, API) call this; the pipeline itself receives enums.
        """
        if isinstance(value, Resolution):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(
            f"Unknown resolution {value!r}; expected one of "
            f"{', '.join(m.value for m in cls)}"
        )


# =============================================================================
# ERROR STATES (Explicit, never raised)
# =============================================================================

class ErrorCode(Enum):
    """
    Reasons an input fragment was omitted from the output.

    Omission is silent for the caller of parse(); these codes only
    surface through ParseReport for diagnostics.
    """
    EMPTY_INPUT = auto()
    MALFORMED_ENTRY = auto()
    EMPTY_NAME = auto()
    UNENCODABLE_TIME = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and queried.
    """
    code: ErrorCode
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            context=self.context + ((key, value),)
        )

    def context_value(self, key: str) -> Optional[str]:
        for k, v in self.context:
            if k == key:
                return v
        return None

    def to_dict(self) -> dict:
        return {
            'code': self.code.name,
            'message': self.message,
            'context': {k: v for k, v in self.context},
        }
