"""Stable application-layer API surface."""

from sd_app.dashboard import DashboardData, stable_id
from sd_app.settings import DashboardSettings
from sd_app.viewmodel import DashboardViewModel
from sd_diff import (
    Change,
    DiffResult,
    Insert,
    ListUpdateCallback,
    Move,
    RecordingCallback,
    Remove,
    UpdateOperation,
)
from sd_model import (
    POSITION_NOT_FOUND,
    ChangePayload,
    ItemKind,
    build,
    position_of_condition,
    position_of_tile,
)

__all__ = [
    "POSITION_NOT_FOUND",
    "Change",
    "ChangePayload",
    "DashboardData",
    "DashboardSettings",
    "DashboardViewModel",
    "DiffResult",
    "Insert",
    "ItemKind",
    "ListUpdateCallback",
    "Move",
    "RecordingCallback",
    "Remove",
    "UpdateOperation",
    "build",
    "position_of_condition",
    "position_of_tile",
    "stable_id",
]
