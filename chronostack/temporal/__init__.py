"""
Temporal Layer

Resolution-aware conversion between time tokens and coordinates.
"""

from .codec import (
    INVALID,
    encode,
    decode,
    is_valid,
    days_from_civil,
    civil_from_days,
)

__all__ = [
    'INVALID',
    'encode',
    'decode',
    'is_valid',
    'days_from_civil',
    'civil_from_days',
]
