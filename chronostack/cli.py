"""
ChronoStack CLI
===============

Command-line front end for the timeline layout pipeline.

COMMANDS:
- layout:  Parse text and print its layout (JSON or table)
- formats: Show the token format for each resolution

USAGE:
    python -m chronostack.cli layout --resolution year --text "新:9 - 25,东汉:25 - 220"
    python -m chronostack.cli layout events.txt --format table
    echo "A:1 - 5" | python -m chronostack.cli layout
"""
import argparse
import json
import sys
from typing import List, Optional

from .contracts.base import Resolution
from .engine import EngineConfig, TimelineEngine, TimelineLayout
from .api.mapper import map_formats, map_layout_to_dto
from .query import label_at


def read_input(args) -> str:
    """Input text from --text, a file argument, or stdin."""
    if args.text is not None:
        return args.text
    if args.file and args.file != "-":
        with open(args.file, 'r', encoding='utf-8') as f:
            return f.read()
    return sys.stdin.read()


def render_table(layout: TimelineLayout) -> str:
    """Plain-text listing of a layout, one row per event."""
    lines = [
        f"resolution={layout.resolution.value} dialect={layout.dialect.value} "
        f"mode={layout.mode.value} layers={layout.layer_count}"
    ]
    labels = layout.labels_by_layer
    for event in layout.events:
        layer_name = ""
        if event.layer in labels:
            layer_name = labels[event.layer].label
        marker = f" [{event.note_index}]" if event.note_index else ""
        lines.append(
            f"  L{event.layer:<3} {layer_name:<14} {event.name}{marker}: "
            f"{event.start_str} - {event.end_str} "
            f"(visual {event.visual_start:.3f} .. {event.visual_end:.3f})"
        )
    for layer, label in layout.category_labels:
        for transition in label.transitions:
            lines.append(
                f"  L{layer} renamed at {transition.year}: "
                f"{label_at(label, transition.year)}"
            )
    for footnote in layout.footnotes:
        lines.append(f"  [{footnote.index}] {footnote.name}: {footnote.note}")
    lines.append(f"  range {layout.time_range.min} .. {layout.time_range.max}")
    if layout.rejections:
        lines.append(f"  dropped {len(layout.rejections)} malformed entries")
    return "\n".join(lines)


def cmd_layout(args) -> int:
    config = EngineConfig.from_env()
    engine = TimelineEngine(config)
    layout = engine.layout(read_input(args), args.resolution)

    if args.format == "table":
        print(render_table(layout))
    else:
        print(json.dumps(map_layout_to_dto(layout), ensure_ascii=False, indent=2))
    return 0


def cmd_formats(args) -> int:
    for hints in map_formats():
        print(f"{hints['resolution']:<6} {hints['format']}")
        print(f"       e.g. {hints['example']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ChronoStack timeline layout")
    subparsers = parser.add_subparsers(dest="command")

    layout_parser = subparsers.add_parser("layout", help="Lay out timeline text")
    layout_parser.add_argument("file", nargs="?", help="Input file ('-' or omitted for stdin)")
    layout_parser.add_argument("--text", help="Inline input text")
    layout_parser.add_argument(
        "--resolution",
        choices=[r.value for r in Resolution],
        default=None,
        help="Time token resolution (default from CHRONOSTACK_RESOLUTION, else year)"
    )
    layout_parser.add_argument("--format", choices=["json", "table"], default="json")

    subparsers.add_parser("formats", help="Show token formats per resolution")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "layout":
        return cmd_layout(args)
    elif args.command == "formats":
        return cmd_formats(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
