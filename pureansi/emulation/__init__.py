"""Grid emulation for pureansi."""

from .grid_buffer import GridBuffer
from .snapshot import GridSnapshot, SnapshotComparison, compare_snapshots, take_snapshot

__all__ = [
    "GridBuffer",
    "GridSnapshot",
    "SnapshotComparison",
    "compare_snapshots",
    "take_snapshot",
]
