"""
API Mapper
==========

Transforms a TimelineLayout into JSON-ready DTO dicts for renderers.

MAPPING RULES:
==============
1. visual_start / visual_end are authoritative for geometry
2. start_str / end_str are authoritative for displayed labels
3. Preserve engine ordering; never re-sort
"""
from typing import Any, Dict, List

from ..contracts.base import Resolution
from ..contracts.events import Event
from ..engine import TimelineLayout


# Token format hints and sample inputs per resolution
RESOLUTION_FORMATS: Dict[Resolution, Dict[str, str]] = {
    Resolution.YEAR: {
        "format": "Name:2020 - 2021",
        "example": "新:9 - 25,东汉:25 - 220,魏:220 - 266,蜀:221 - 263,吴:222 - 280",
    },
    Resolution.MONTH: {
        "format": "Name:2020-01 - 2021-12",
        "example": "Project A:2020-01 - 2020-06,Project B:2020-04 - 2020-09",
    },
    Resolution.DAY: {
        "format": "Name:2020-01-15 - 2021-03-20",
        "example": "Sprint 1:2020-01-01 - 2020-01-14,Sprint 2:2020-01-15 - 2020-01-28",
    },
}


def map_formats() -> List[Dict[str, str]]:
    return [
        {"resolution": resolution.value, **hints}
        for resolution, hints in RESOLUTION_FORMATS.items()
    ]


def _map_event(event: Event) -> Dict[str, Any]:
    dto = event.to_dict()
    dto["display_range"] = f"{event.start_str} - {event.end_str}"
    return dto


def map_layout_to_dto(layout: TimelineLayout) -> Dict[str, Any]:
    """
    Map TimelineLayout to the renderer DTO.

    category_labels keys are stringified layer indices (JSON object keys).
    """
    return {
        "layout_id": f"layout_{layout.layout_hash[:12]}",
        "resolution": layout.resolution.value,
        "dialect": layout.dialect.value,
        "mode": layout.mode.value,
        "layer_count": layout.layer_count,
        "events": [_map_event(event) for event in layout.events],
        "time_range": layout.time_range.to_dict(),
        "category_labels": {
            str(layer): label.to_dict() for layer, label in layout.category_labels
        },
        "footnotes": [footnote.to_dict() for footnote in layout.footnotes],
        "axis": layout.axis.to_dict(),
        "dropped_entries": len(layout.rejections),
    }
