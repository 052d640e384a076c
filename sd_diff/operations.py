"""Value types for list update operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Insert:
    position: int
    count: int

    def sort_key(self) -> tuple[int, int, int]:
        return (0, self.position, self.count)


@dataclass(frozen=True)
class Remove:
    position: int
    count: int

    def sort_key(self) -> tuple[int, int, int]:
        return (1, self.position, self.count)


@dataclass(frozen=True)
class Move:
    from_position: int
    to_position: int

    def sort_key(self) -> tuple[int, int, int]:
        return (2, self.from_position, self.to_position)


@dataclass(frozen=True)
class Change:
    """Rows at ``position`` changed; ``payload`` None asks for a full rebind."""

    position: int
    count: int
    payload: Any = None

    def sort_key(self) -> tuple[int, int, int]:
        return (3, self.position, self.count)


UpdateOperation = Union[Insert, Remove, Move, Change]


def sorted_operations(operations: list[UpdateOperation]) -> list[UpdateOperation]:
    """Order operations by type then arguments, for dispatch-order agnostic checks."""
    return sorted(operations, key=lambda op: op.sort_key())


def describe(operation: UpdateOperation) -> str:
    if isinstance(operation, Insert):
        return f"insert {operation.count} at {operation.position}"
    if isinstance(operation, Remove):
        return f"remove {operation.count} at {operation.position}"
    if isinstance(operation, Move):
        return f"move {operation.from_position} -> {operation.to_position}"
    payload = "" if operation.payload is None else f" ({_payload_label(operation.payload)})"
    return f"change {operation.count} at {operation.position}{payload}"


def _payload_label(payload: Any) -> str:
    return str(getattr(payload, "value", payload))
