"""Tests for time aggregation and pairwise diffs."""

import pytest

from trace_explorer.analysis import (
    aggregate_time,
    compare_entries,
    decompose_duration,
    diff_paths,
    diff_plans,
    format_duration,
    split_annotation,
)
from trace_explorer.models import ChangeKind, PathSegment
from trace_explorer.pipeline import load_trace


class TestAggregateTime:
    """Tests for aggregate_time()."""

    @pytest.fixture
    def index(self, nested_document):
        return load_trace(nested_document).index

    def test_same_position(self, index):
        """Test that a single entry reports its own time."""
        assert aggregate_time(index, 2, 2) == 35
        assert aggregate_time(index, 4, 4) == 45

    def test_sums_leaves_only(self, index):
        """Test that composite stages are not counted."""
        # positions 1..4: physical (20, leaf), local (35, composite),
        # global (5, leaf), optimize (45, composite)
        assert aggregate_time(index, 0, 4) == 25

    def test_excludes_lower_bound(self, index):
        """Test that the lower entry itself is excluded."""
        assert aggregate_time(index, 0, 1) == 20
        assert aggregate_time(index, 1, 3) == 5

    def test_symmetric(self, index):
        """Test that argument order does not matter."""
        for a in range(len(index)):
            for b in range(len(index)):
                assert aggregate_time(index, a, b) == aggregate_time(index, b, a)

    def test_out_of_range(self, index):
        """Test that invalid positions raise IndexError."""
        with pytest.raises(IndexError):
            aggregate_time(index, 0, 5)
        with pytest.raises(IndexError):
            aggregate_time(index, -1, 2)


class TestFormatDuration:
    """Tests for duration decomposition and formatting."""

    def test_decompose(self):
        """Test splitting into (ns, µs, ms, s)."""
        assert decompose_duration(1_500_000) == (0, 500, 1, 0)
        assert decompose_duration(3_002_001_004) == (4, 1, 2, 3)

    def test_zero(self):
        """Test that zero is reported in nanoseconds."""
        assert format_duration(0) == "0ns"

    def test_fractional_milliseconds(self):
        """Test the remainder of smaller units as a fraction."""
        assert format_duration(1_500_000) == "1.500000ms"

    def test_exact_units(self):
        """Test that exact values have no fractional part."""
        assert format_duration(2_000_000) == "2ms"
        assert format_duration(7_000) == "7µs"
        assert format_duration(999) == "999ns"
        assert format_duration(2_000_000_000) == "2s"

    def test_zero_padded_fraction(self):
        """Test that fractions keep their leading zeros."""
        assert format_duration(1_000_001) == "1.000001ms"
        assert format_duration(1_005) == "1.005µs"
        assert format_duration(3_002_001_004) == "3.002001004s"

    def test_large_seconds(self):
        """Test that seconds are the largest unit."""
        assert format_duration(5_000 * 10**9) == "5000s"

    def test_negative(self):
        """Test that negative durations are rejected."""
        with pytest.raises(ValueError):
            format_duration(-1)


class TestSplitAnnotation:
    """Tests for split_annotation()."""

    def test_trailing_annotation(self):
        """Test splitting off a trailing attribute block."""
        assert split_annotation("Get t1 // { arity: 2 }") == ("Get t1", " // { arity: 2 }")

    def test_last_marker_wins(self):
        """Test that the last marker is used."""
        line = "Map (a // {b}) // { types: [int] }"
        assert split_annotation(line) == ("Map (a // {b})", " // { types: [int] }")

    def test_no_annotation(self):
        """Test lines without a marker."""
        assert split_annotation("  Filter #0 > 1") == ("  Filter #0 > 1", None)

    def test_marker_not_trailing(self):
        """Test that a marker followed by other text is not an annotation."""
        line = "Get t // { x } and more"
        assert split_annotation(line) == (line, None)


class TestDiffPaths:
    """Tests for diff_paths()."""

    def test_identical(self):
        """Test that identical paths are a single unchanged run."""
        assert diff_paths("optimize/local", "optimize/local") == [
            PathSegment(kind=ChangeKind.EQUAL, text="optimize/local")
        ]

    def test_changed_last_segment(self):
        """Test word level changes."""
        assert diff_paths("optimize/local/logical", "optimize/local/physical") == [
            PathSegment(kind=ChangeKind.EQUAL, text="optimize/local/"),
            PathSegment(kind=ChangeKind.DELETE, text="logical"),
            PathSegment(kind=ChangeKind.INSERT, text="physical"),
        ]

    def test_inserted_segment(self):
        """Test an added path segment."""
        segments = diff_paths("optimize", "optimize/global")
        assert segments == [
            PathSegment(kind=ChangeKind.EQUAL, text="optimize"),
            PathSegment(kind=ChangeKind.INSERT, text="/global"),
        ]


class TestDiffPlans:
    """Tests for diff_plans()."""

    def test_indentation_only_change(self):
        """Test that leading whitespace changes are not reported."""
        lines = diff_plans("Project\n  Get t0", "Project\n    Get t0")
        assert [line.kind for line in lines] == [ChangeKind.EQUAL, ChangeKind.EQUAL]
        assert lines[1].text == "    Get t0"

    def test_trailing_whitespace_matters(self):
        """Test that only leading whitespace is ignored."""
        lines = diff_plans("Get t0", "Get t0 ")
        assert [line.kind for line in lines] == [ChangeKind.DELETE, ChangeKind.INSERT]

    def test_changed_line(self):
        """Test a replaced plan line."""
        lines = diff_plans("Project\n  Filter a\n  Get t0", "Project\n  Filter b\n  Get t0")
        assert [(line.kind, line.text) for line in lines] == [
            (ChangeKind.EQUAL, "Project"),
            (ChangeKind.DELETE, "  Filter a"),
            (ChangeKind.INSERT, "  Filter b"),
            (ChangeKind.EQUAL, "  Get t0"),
        ]

    def test_annotations_tagged(self):
        """Test that annotations are split off every displayed line."""
        lines = diff_plans("Get t0 // { arity: 1 }", "Get t0 // { arity: 2 }")
        assert [line.text for line in lines] == ["Get t0", "Get t0"]
        assert [line.annotation for line in lines] == [" // { arity: 1 }", " // { arity: 2 }"]
        assert [line.render(show_annotations=False) for line in lines] == ["Get t0", "Get t0"]

    def test_only_newlines_split_lines(self):
        """Test that other line separators stay inside a plan line."""
        lines = diff_plans("Get t0\x0cx\u2028y\n", "Get t0\x0cx\u2028y\n")
        assert [(line.kind, line.text) for line in lines] == [
            (ChangeKind.EQUAL, "Get t0\x0cx\u2028y"),
        ]

    def test_identical_plans(self):
        """Test that comparing a plan with itself yields no changes."""
        lines = diff_plans("A\n B", "A\n B")
        assert all(line.kind is ChangeKind.EQUAL for line in lines)


class TestCompareEntries:
    """Tests for compare_entries()."""

    def test_comparison(self, nested_document):
        """Test combining path diff, plan diff and duration."""
        index = load_trace(nested_document).index
        comparison = compare_entries(index, 0, 1)

        assert comparison.duration == 20
        assert comparison.duration_text == "20ns"
        assert [line.kind for line in comparison.plan_diff] == [
            ChangeKind.DELETE,
            ChangeKind.INSERT,
        ]
        assert comparison.path_diff[0] == PathSegment(
            kind=ChangeKind.EQUAL, text="optimize/local/"
        )

    def test_same_entry(self, nested_document):
        """Test comparing an entry with itself."""
        index = load_trace(nested_document).index
        comparison = compare_entries(index, 3, 3)
        assert comparison.duration == 5
        assert all(s.kind is ChangeKind.EQUAL for s in comparison.path_diff)
