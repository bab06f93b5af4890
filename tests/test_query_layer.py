"""
Query Layer Tests

Read-only derivations over processed events.
"""

import pytest

from chronostack.contracts.base import Resolution
from chronostack.contracts.events import CategoryLabel, Footnote, TimeRange, Transition
from chronostack.engine import process_events
from chronostack.ingestion import parse
from chronostack.query import (
    axis_ticks, category_labels, footnotes, label_at, layer_count, time_range
)


def processed(text: str, resolution: Resolution = Resolution.YEAR):
    return process_events(parse(text, resolution))


class TestTimeRange:

    def test_empty_default(self):
        assert time_range([]) == TimeRange(min=0, max=100)

    def test_uses_visual_positions(self):
        events = processed("新:9 - 25,东汉:25 - 220")
        assert time_range(events) == TimeRange(min=9, max=221)

    def test_falls_back_to_raw_coordinates(self):
        events = parse("A:9 - 25,B:30 - 40")
        assert time_range(events) == TimeRange(min=9, max=40)


class TestCategoryLabels:

    def test_fixed_mode_labels(self):
        events = processed("秦|孝公:-361 - -338,楚|威王:-339 - -329,秦|惠文王:-337 - -311")
        labels = category_labels(events)

        assert labels == {0: CategoryLabel(label="秦"), 1: CategoryLabel(label="楚")}
        assert list(labels) == [0, 1]

    def test_transitions_carried(self):
        events = processed("魏{220:曹魏}|曹操:196 - 220,曹丕:220 - 226")
        labels = category_labels(events)
        assert labels[0].transitions == (Transition(year=220, name="曹魏"),)

    def test_auto_mode_has_no_labels(self):
        assert category_labels(processed("A:1 - 2,B:1 - 3")) == {}


class TestFootnotes:

    def test_sorted_by_index(self):
        events = processed("B:50 - 60{second look},A:1 - 2{first},C:3 - 4")
        assert footnotes(events) == [
            Footnote(index=1, name="B", note="second look"),
            Footnote(index=2, name="A", note="first"),
        ]

    def test_empty(self):
        assert footnotes([]) == []


class TestLayerCount:

    def test_counts_layers(self):
        assert layer_count(processed("A:1 - 10,B:5 - 15,C:6 - 16")) == 3

    def test_empty(self):
        assert layer_count([]) == 0


class TestLabelAt:

    LABEL = CategoryLabel(
        label="魏",
        transitions=(Transition(year=190, name="先魏"), Transition(year=220, name="曹魏")),
    )

    @pytest.mark.parametrize("year, expected", [
        (100, "魏"),
        (190, "先魏"),
        (219, "先魏"),
        (220, "曹魏"),
        (300, "曹魏"),
    ])
    def test_name_in_force(self, year, expected):
        assert label_at(self.LABEL, year) == expected


class TestAxisTicks:

    def test_year_ticks(self):
        axis = axis_ticks(TimeRange(min=9, max=220), Resolution.YEAR)

        assert axis.interval == 22
        assert axis.ticks[0] == (22, "22")
        assert axis.ticks[-1] == (220, "220")
        assert len(axis.ticks) == 10

    def test_small_span_uses_unit_interval(self):
        axis = axis_ticks(TimeRange(min=0, max=5), Resolution.YEAR)
        assert [v for v, _ in axis.ticks] == [0, 1, 2, 3, 4, 5]

    def test_fractional_bounds(self):
        axis = axis_ticks(TimeRange(min=760.5, max=763), Resolution.YEAR)
        assert [v for v, _ in axis.ticks] == [761, 762, 763]

    def test_month_labels(self):
        axis = axis_ticks(TimeRange(min=2020 * 12 + 1, max=2020 * 12 + 3), Resolution.MONTH)
        assert [label for _, label in axis.ticks] == ["2020-01", "2020-02", "2020-03"]

    def test_negative_years(self):
        axis = axis_ticks(TimeRange(min=-361, max=-329), Resolution.YEAR)
        assert axis.interval == 4
        assert axis.ticks[0] == (-360, "-360")
