"""Grid snapshot and comparison system for snapshot testing of CLI output."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union, cast

from ..exceptions import SnapshotError
from ..warnings import CategorizedLogger, WarningCategory
from .grid_buffer import GridBuffer, validate_width

logger = logging.getLogger(__name__)
categorized_logger = CategorizedLogger(logger)

SNAPSHOT_VERSION = "1.0"


def _grid_of(source: Any) -> GridBuffer:
    # Accept a Terminal (anything exposing ``.grid``) as well as a bare grid
    grid = getattr(source, "grid", source)
    if not isinstance(grid, GridBuffer):
        raise TypeError(f"Cannot snapshot {type(source).__name__}")
    return grid


class GridSnapshot:
    """Represents a snapshot of a GridBuffer state for regression testing."""

    def __init__(self, source: Any):
        """Create a snapshot from a GridBuffer or a Terminal."""
        grid = _grid_of(source)
        self.metadata: Dict[str, Any] = {
            "version": SNAPSHOT_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "width": grid.width,
            "height": grid.height,
        }
        self.lines: List[str] = grid.lines()
        self.cursor = {"row": grid.cursor_row, "col": grid.cursor_col}

    @property
    def width(self) -> int:
        return cast(int, self.metadata["width"])

    @property
    def height(self) -> int:
        return cast(int, self.metadata["height"])

    def to_text(self) -> str:
        """Render the captured rows the way ``contents_to_string`` does."""
        return "".join(f"{line}\n" for line in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert snapshot to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata,
            "lines": self.lines,
            "cursor": self.cursor,
        }

    def to_json(self) -> str:
        """Convert snapshot to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridSnapshot":
        """Create snapshot from dictionary data.

        :raises SnapshotError: if required keys are missing or the rows do not
            match the recorded dimensions.
        """
        snapshot = cls.__new__(cls)  # Create without calling __init__
        try:
            snapshot.metadata = dict(data["metadata"])
            snapshot.lines = [str(line) for line in data["lines"]]
            cursor = data.get("cursor", {"row": 0, "col": 0})
            snapshot.cursor = {"row": int(cursor["row"]), "col": int(cursor["col"])}
            width = validate_width(snapshot.metadata["width"])
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(
                "Malformed snapshot data", original_exception=e
            ) from e

        snapshot.metadata.setdefault("height", len(snapshot.lines))
        if snapshot.metadata["height"] != len(snapshot.lines):
            raise SnapshotError(
                "Snapshot height does not match its rows",
                context={
                    "height": snapshot.metadata["height"],
                    "rows": len(snapshot.lines),
                },
            )
        for row, line in enumerate(snapshot.lines):
            if len(line) != width:
                raise SnapshotError(
                    "Snapshot row does not match its width",
                    context={"row": row, "width": width, "length": len(line)},
                )
        return snapshot

    @classmethod
    def from_json(cls, json_str: str) -> "GridSnapshot":
        """Create snapshot from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise SnapshotError("Snapshot is not valid JSON", original_exception=e) from e
        return cls.from_dict(data)

    def to_grid_buffer(self) -> GridBuffer:
        """Reconstruct a GridBuffer from this snapshot."""
        grid = GridBuffer(self.width)
        for line in self.lines:
            grid.cells.extend(line)
        grid.height = len(self.lines)
        grid.cursor_row = self.cursor["row"]
        grid.cursor_col = self.cursor["col"]
        return grid

    def save_to_file(self, filepath: str) -> None:
        """Save snapshot to a JSON file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        categorized_logger.info(
            WarningCategory.SNAPSHOT, f"Snapshot saved to {filepath}"
        )

    @classmethod
    def load_from_file(cls, filepath: str) -> "GridSnapshot":
        """Load snapshot from a JSON file."""
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                snapshot = cls.from_json(f.read())
        except OSError as e:
            raise SnapshotError(
                "Cannot read snapshot", context={"path": filepath}, original_exception=e
            ) from e
        categorized_logger.info(
            WarningCategory.SNAPSHOT, f"Snapshot loaded from {filepath}"
        )
        return snapshot


def take_snapshot(source: Any) -> GridSnapshot:
    """Convenience function to take a snapshot of a GridBuffer or Terminal."""
    return GridSnapshot(source)


class SnapshotComparison:
    """Represents the result of comparing two snapshots.

    Timestamps and versions are metadata about the capture, not about the
    grid, so they are ignored.
    """

    def __init__(self, snapshot1: GridSnapshot, snapshot2: GridSnapshot):
        """Compare two snapshots and identify differences."""
        self.snapshot1 = snapshot1
        self.snapshot2 = snapshot2
        self.is_identical = True
        self.differences: Dict[str, Any] = {}

        dims1 = {"width": snapshot1.width, "height": snapshot1.height}
        dims2 = {"width": snapshot2.width, "height": snapshot2.height}
        if dims1 != dims2:
            self.is_identical = False
            self.differences["dimensions"] = {"before": dims1, "after": dims2}

        if snapshot1.lines != snapshot2.lines:
            self.is_identical = False
            self.differences["lines"] = {
                "before": snapshot1.to_text(),
                "after": snapshot2.to_text(),
            }

        if snapshot1.cursor != snapshot2.cursor:
            self.is_identical = False
            self.differences["cursor"] = {
                "before": snapshot1.cursor,
                "after": snapshot2.cursor,
            }

        logger.debug(f"Snapshot comparison: {len(self.differences)} difference(s)")

    def has_differences(self) -> bool:
        """Return True if there are any differences between snapshots."""
        return not self.is_identical

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the comparison results."""
        return {
            "is_identical": self.is_identical,
            "differences_count": len(self.differences),
            "differences": list(self.differences.keys()),
        }

    def get_line_differences(self) -> List[Tuple[int, Optional[str], Optional[str]]]:
        """Rows that differ as ``(row, before, after)``; a missing row is None."""
        before, after = self.snapshot1.lines, self.snapshot2.lines
        diffs: List[Tuple[int, Optional[str], Optional[str]]] = []
        for row in range(max(len(before), len(after))):
            line1 = before[row] if row < len(before) else None
            line2 = after[row] if row < len(after) else None
            if line1 != line2:
                diffs.append((row, line1, line2))
        return diffs

    def format_report(self) -> str:
        """Build a human-readable comparison report."""
        out = ["=== Snapshot Comparison Report ==="]
        out.append(f"Overall: {'IDENTICAL' if self.is_identical else 'DIFFERENCES FOUND'}")
        if self.is_identical:
            return "\n".join(out)

        for diff_type in ("dimensions", "cursor"):
            if diff_type in self.differences:
                diff = self.differences[diff_type]
                out.append(f"- {diff_type.upper()}:")
                out.append(f"  Before: {diff['before']}")
                out.append(f"  After:  {diff['after']}")
        line_diffs = self.get_line_differences()
        if line_diffs:
            out.append(f"- LINES ({len(line_diffs)} differ):")
            for row, line1, line2 in line_diffs:
                out.append(f"  row {row}:")
                out.append(f"    - {line1!r}")
                out.append(f"    + {line2!r}")
        return "\n".join(out)

    def print_report(self) -> None:
        """Print a human-readable comparison report."""
        print(self.format_report())


def compare_snapshots(
    snapshot1: GridSnapshot, snapshot2: GridSnapshot
) -> SnapshotComparison:
    """Convenience function to compare two snapshots."""
    return SnapshotComparison(snapshot1, snapshot2)


def load_snapshot(path_or_json: Union[str, Dict[str, Any]]) -> GridSnapshot:
    """Load a snapshot from a dict, a JSON string, or a file path."""
    if isinstance(path_or_json, dict):
        return GridSnapshot.from_dict(path_or_json)
    if path_or_json.lstrip().startswith("{"):
        return GridSnapshot.from_json(path_or_json)
    return GridSnapshot.load_from_file(path_or_json)
