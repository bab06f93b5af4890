"""
Engine Orchestration Module

This module provides the unified interface for running the whole
pipeline on one input while keeping each layer independent.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contract records
2. Data flows strictly forward: parse -> layer -> resolve -> query
3. The engine holds configuration, never results
4. Memoization is owned by the caller (LayoutCache) and is unobservable
"""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union
import hashlib
import json
import os
import threading

from .contracts.base import Error, Resolution
from .contracts.events import (
    CategoryLabel, Event, Footnote, InputDialect, LayoutMode, TimeAxis, TimeRange
)
from .core import assign_layers, resolve_layout_mode, resolve_overlaps
from .ingestion import parse_with_report
from .observability import get_logger
from .query import (
    DEFAULT_TICK_TARGET, axis_ticks, category_labels, footnotes, layer_count, time_range
)


logger = get_logger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    return value if value >= minimum else default


@dataclass
class EngineConfig:
    """Configuration for the timeline engine."""
    default_resolution: Resolution = Resolution.YEAR
    enable_caching: bool = False  # Disabled by default; results never depend on it
    max_cache_entries: int = 128
    axis_tick_target: int = DEFAULT_TICK_TARGET

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        """Build configuration from CHRONOSTACK_* environment variables."""
        resolution = Resolution.YEAR
        raw_resolution = os.environ.get("CHRONOSTACK_RESOLUTION")
        if raw_resolution:
            try:
                resolution = Resolution.parse(raw_resolution)
            except ValueError:
                logger.warning("Ignoring CHRONOSTACK_RESOLUTION=%r", raw_resolution)

        return cls(
            default_resolution=resolution,
            enable_caching=_env_bool("CHRONOSTACK_ENABLE_CACHE", False),
            max_cache_entries=_env_int("CHRONOSTACK_CACHE_SIZE", 128),
            axis_tick_target=_env_int("CHRONOSTACK_TICK_TARGET", DEFAULT_TICK_TARGET),
        )


# =============================================================================
# RESULT RECORD
# =============================================================================

@dataclass(frozen=True)
class TimelineLayout:
    """
    Everything a renderer needs for one input.

    DETERMINISTIC:
    Same text + same resolution = identical layout (layout_hash included).
    """
    resolution: Resolution
    dialect: InputDialect
    mode: LayoutMode
    events: Tuple[Event, ...]
    time_range: TimeRange
    category_labels: Tuple[Tuple[int, CategoryLabel], ...]
    footnotes: Tuple[Footnote, ...]
    axis: TimeAxis
    layer_count: int
    rejections: Tuple[Error, ...] = field(default_factory=tuple)
    layout_hash: str = ""

    @property
    def labels_by_layer(self) -> Dict[int, CategoryLabel]:
        return dict(self.category_labels)


def compute_layout_hash(events: List[Event]) -> str:
    """SHA-256 over the canonical JSON of processed events."""
    canonical = json.dumps(
        [event.to_dict() for event in events],
        sort_keys=True,
        ensure_ascii=False,
        separators=(',', ':'),
    )
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


# =============================================================================
# CALLER-OWNED CACHE
# =============================================================================

class LayoutCache:
    """
    Bounded LRU memo of layouts keyed by (resolution, text).

    Owned by the caller, never by the engine. A hit returns a layout
    equal to what a fresh computation would produce. Safe to share
    across threads.
    """

    def __init__(self, max_entries: int = 128):
        self._lock = threading.Lock()
        self._max_entries = max(1, max_entries)
        self._entries: 'OrderedDict[str, TimelineLayout]' = OrderedDict()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def key(text: str, resolution: Resolution) -> str:
        seed = f"{resolution.value}|{text}"
        return hashlib.sha256(seed.encode('utf-8')).hexdigest()

    def get(self, text: str, resolution: Resolution) -> Optional[TimelineLayout]:
        key = self.key(text, resolution)
        with self._lock:
            layout = self._entries.get(key)
            if layout is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return layout

    def put(self, text: str, resolution: Resolution, layout: TimelineLayout) -> None:
        key = self.key(text, resolution)
        with self._lock:
            self._entries[key] = layout
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# ENGINE
# =============================================================================

def process_events(events: List[Event]) -> List[Event]:
    """Layer assignment followed by overlap resolution."""
    return resolve_overlaps(assign_layers(events))


class TimelineEngine:
    """
    Timeline layout pipeline.

    LAYER FLOW:
    ===========
    1. Ingestion: text -> Event (unordered)
    2. Layering:  Event -> Event + layer
    3. Overlap:   Event -> Event + visual position
    4. Query:     range, labels, footnotes, axis
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def new_cache(self) -> LayoutCache:
        """A cache sized from this engine's configuration."""
        return LayoutCache(self._config.max_cache_entries)

    def layout(
        self,
        text: object,
        resolution: Union[Resolution, str, None] = None,
        cache: Optional[LayoutCache] = None
    ) -> TimelineLayout:
        """
        Run the full pipeline on one input.

        A cache is consulted only when one is passed in and caching is
        enabled; either way the result is the same.
        """
        resolution = Resolution.parse(resolution or self._config.default_resolution)
        use_cache = (
            cache is not None
            and self._config.enable_caching
            and isinstance(text, str)
        )

        if use_cache:
            cached = cache.get(text, resolution)
            if cached is not None:
                logger.debug("Layout cache hit (%s)", resolution.value)
                return cached
            logger.debug("Layout cache miss (%s)", resolution.value)

        layout = self._compute(text, resolution)

        if use_cache:
            cache.put(text, resolution, layout)
        return layout

    def _compute(self, text: object, resolution: Resolution) -> TimelineLayout:
        report = parse_with_report(text, resolution)
        parsed = list(report.events)

        processed = process_events(parsed)
        bounds = time_range(processed)

        return TimelineLayout(
            resolution=resolution,
            dialect=report.dialect,
            mode=resolve_layout_mode(parsed),
            events=tuple(processed),
            time_range=bounds,
            category_labels=tuple(category_labels(processed).items()),
            footnotes=tuple(footnotes(processed)),
            axis=axis_ticks(bounds, resolution, self._config.axis_tick_target),
            layer_count=layer_count(processed),
            rejections=report.rejections,
            layout_hash=compute_layout_hash(processed),
        )
