"""List diff engine and update operation types."""

from sd_diff.callbacks import (
    BatchingCallback,
    FanOutCallback,
    ListUpdateCallback,
    RecordingCallback,
)
from sd_diff.engine import NO_POSITION, DiffCallback, DiffResult, calculate_diff
from sd_diff.operations import (
    Change,
    Insert,
    Move,
    Remove,
    UpdateOperation,
    describe,
    sorted_operations,
)

__all__ = [
    "NO_POSITION",
    "BatchingCallback",
    "Change",
    "DiffCallback",
    "DiffResult",
    "FanOutCallback",
    "Insert",
    "ListUpdateCallback",
    "Move",
    "RecordingCallback",
    "Remove",
    "UpdateOperation",
    "calculate_diff",
    "describe",
    "sorted_operations",
]
