"""Tests for grid snapshots and their comparison."""

import json

import pytest

from pureansi import Terminal
from pureansi.emulation.grid_buffer import GridBuffer
from pureansi.emulation.snapshot import (
    GridSnapshot,
    SnapshotComparison,
    compare_snapshots,
    load_snapshot,
    take_snapshot,
)
from pureansi.exceptions import SnapshotError


@pytest.fixture
def rendered_terminal():
    term = Terminal(6)
    term.feed(b"hello\r\nworld!x")
    return term


class TestGridSnapshot:
    def test_captures_grid_state(self, rendered_terminal):
        snapshot = take_snapshot(rendered_terminal)
        assert snapshot.width == 6
        assert snapshot.height == 3
        assert snapshot.lines == ["hello ", "world!", "x     "]
        assert snapshot.cursor == {"row": 2, "col": 1}
        assert snapshot.metadata["version"] == "1.0"
        assert "timestamp" in snapshot.metadata

    def test_to_text_matches_contents(self, rendered_terminal):
        snapshot = take_snapshot(rendered_terminal)
        assert snapshot.to_text() == rendered_terminal.contents_to_string()

    def test_snapshot_of_empty_grid(self, grid):
        snapshot = take_snapshot(grid)
        assert snapshot.lines == []
        assert snapshot.to_text() == ""

    def test_rejects_unrelated_objects(self):
        with pytest.raises(TypeError):
            GridSnapshot("not a grid")

    def test_json_round_trip(self, rendered_terminal):
        snapshot = take_snapshot(rendered_terminal)
        restored = GridSnapshot.from_json(snapshot.to_json())
        assert restored.to_dict() == snapshot.to_dict()

    def test_json_keeps_non_ascii(self):
        term = Terminal(3)
        term.feed("né".encode("utf-8"))
        assert "né" in take_snapshot(term).to_json()

    def test_file_round_trip(self, rendered_terminal, tmp_path):
        path = tmp_path / "screen.json"
        snapshot = take_snapshot(rendered_terminal)
        snapshot.save_to_file(str(path))
        loaded = GridSnapshot.load_from_file(str(path))
        assert loaded.lines == snapshot.lines
        assert loaded.cursor == snapshot.cursor

    def test_to_grid_buffer(self, rendered_terminal):
        grid = take_snapshot(rendered_terminal).to_grid_buffer()
        assert isinstance(grid, GridBuffer)
        assert grid.contents_to_string() == rendered_terminal.contents_to_string()
        assert grid.get_position() == (2, 1)
        grid.put_char("y")
        assert grid.line(2) == "xy    "

    def test_from_dict_defaults_cursor(self):
        data = {"metadata": {"width": 2, "height": 1}, "lines": ["ab"]}
        snapshot = GridSnapshot.from_dict(data)
        assert snapshot.cursor == {"row": 0, "col": 0}

    def test_from_dict_fills_missing_height(self):
        snapshot = GridSnapshot.from_dict({"metadata": {"width": 1}, "lines": ["a", "b"]})
        assert snapshot.height == 2


class TestSnapshotErrors:
    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"metadata": {"width": 2}},
            {"metadata": {}, "lines": []},
            {"metadata": {"width": 0}, "lines": []},
            {"metadata": {"width": 2}, "lines": [], "cursor": {"row": "x", "col": 0}},
        ],
    )
    def test_malformed_data(self, data):
        with pytest.raises(SnapshotError) as exc_info:
            GridSnapshot.from_dict(data)
        assert exc_info.value.original_exception is not None

    def test_height_mismatch(self):
        data = {"metadata": {"width": 2, "height": 3}, "lines": ["ab"]}
        with pytest.raises(SnapshotError) as exc_info:
            GridSnapshot.from_dict(data)
        assert exc_info.value.get_context("rows") == 1

    def test_row_width_mismatch(self):
        data = {"metadata": {"width": 3, "height": 2}, "lines": ["abc", "de"]}
        with pytest.raises(SnapshotError) as exc_info:
            GridSnapshot.from_dict(data)
        assert exc_info.value.get_context("row") == 1
        assert exc_info.value.get_context("length") == 2

    def test_invalid_json(self):
        with pytest.raises(SnapshotError):
            GridSnapshot.from_json("{not json")

    def test_missing_file(self, tmp_path):
        path = str(tmp_path / "missing.json")
        with pytest.raises(SnapshotError) as exc_info:
            GridSnapshot.load_from_file(path)
        assert exc_info.value.get_context("path") == path
        assert isinstance(exc_info.value.original_exception, OSError)


class TestLoadSnapshot:
    def test_from_dict_json_and_path(self, rendered_terminal, tmp_path):
        snapshot = take_snapshot(rendered_terminal)
        path = tmp_path / "s.json"
        snapshot.save_to_file(str(path))

        for source in (snapshot.to_dict(), snapshot.to_json(), str(path)):
            assert load_snapshot(source).lines == snapshot.lines


class TestSnapshotComparison:
    def test_identical_ignores_timestamp(self, rendered_terminal):
        first = take_snapshot(rendered_terminal)
        second = take_snapshot(rendered_terminal)
        second.metadata["timestamp"] = "2000-01-01T00:00:00+00:00"
        comparison = compare_snapshots(first, second)
        assert comparison.is_identical
        assert not comparison.has_differences()
        assert comparison.get_summary() == {
            "is_identical": True,
            "differences_count": 0,
            "differences": [],
        }
        assert comparison.format_report().endswith("Overall: IDENTICAL")

    def test_changed_line(self):
        before = Terminal(4)
        before.feed(b"abcd")
        after = Terminal(4)
        after.feed(b"abXd")
        comparison = SnapshotComparison(take_snapshot(before), take_snapshot(after))
        assert comparison.has_differences()
        assert list(comparison.differences) == ["lines"]
        assert comparison.differences["lines"]["after"] == "abXd\n"
        assert comparison.get_line_differences() == [(0, "abcd", "abXd")]

    def test_extra_row_and_cursor(self):
        before = Terminal(2)
        before.feed(b"ab")
        after = Terminal(2)
        after.feed(b"abc")
        comparison = compare_snapshots(take_snapshot(before), take_snapshot(after))
        assert set(comparison.get_summary()["differences"]) == {
            "dimensions",
            "lines",
            "cursor",
        }
        assert comparison.get_line_differences() == [(1, None, "c ")]

    def test_format_report(self):
        before = Terminal(3)
        before.feed(b"one")
        after = Terminal(3)
        after.feed(b"two")
        report = compare_snapshots(take_snapshot(before), take_snapshot(after)).format_report()
        lines = report.splitlines()
        assert lines[0] == "=== Snapshot Comparison Report ==="
        assert lines[1] == "Overall: DIFFERENCES FOUND"
        assert "- LINES (1 differ):" in lines
        assert "    - 'one'" in lines
        assert "    + 'two'" in lines

    def test_print_report(self, rendered_terminal, capsys):
        snapshot = take_snapshot(rendered_terminal)
        compare_snapshots(snapshot, snapshot).print_report()
        assert "IDENTICAL" in capsys.readouterr().out

    def test_snapshot_survives_json_for_comparison(self, rendered_terminal):
        snapshot = take_snapshot(rendered_terminal)
        restored = GridSnapshot.from_dict(json.loads(snapshot.to_json()))
        assert compare_snapshots(snapshot, restored).is_identical
