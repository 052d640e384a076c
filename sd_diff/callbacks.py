"""Receivers for the operation stream produced by a diff."""

from __future__ import annotations

from typing import Any, Protocol

from sd_diff.operations import Change, Insert, Move, Remove, UpdateOperation


class ListUpdateCallback(Protocol):
    """Rendering-side hooks for incremental list updates."""

    def on_inserted(self, position: int, count: int) -> None: ...
    def on_removed(self, position: int, count: int) -> None: ...
    def on_moved(self, from_position: int, to_position: int) -> None: ...
    def on_changed(self, position: int, count: int, payload: Any = None) -> None: ...


class RecordingCallback:
    """Collect dispatched updates as operation values."""

    def __init__(self) -> None:
        self.operations: list[UpdateOperation] = []

    def on_inserted(self, position: int, count: int) -> None:
        self.operations.append(Insert(position, count))

    def on_removed(self, position: int, count: int) -> None:
        self.operations.append(Remove(position, count))

    def on_moved(self, from_position: int, to_position: int) -> None:
        self.operations.append(Move(from_position, to_position))

    def on_changed(self, position: int, count: int, payload: Any = None) -> None:
        self.operations.append(Change(position, count, payload))


class FanOutCallback:
    """Forward every update to several callbacks in registration order."""

    def __init__(self, targets: list[ListUpdateCallback]) -> None:
        self._targets = list(targets)

    def on_inserted(self, position: int, count: int) -> None:
        for target in self._targets:
            target.on_inserted(position, count)

    def on_removed(self, position: int, count: int) -> None:
        for target in self._targets:
            target.on_removed(position, count)

    def on_moved(self, from_position: int, to_position: int) -> None:
        for target in self._targets:
            target.on_moved(from_position, to_position)

    def on_changed(self, position: int, count: int, payload: Any = None) -> None:
        for target in self._targets:
            target.on_changed(position, count, payload)


_NONE = 0
_INSERT = 1
_REMOVE = 2
_CHANGE = 3


class BatchingCallback:
    """Merge consecutive compatible updates before forwarding them.

    Adjacent inserts, adjacent removes and overlapping changes that share a
    payload are merged into one ranged update. Moves are never merged. Call
    ``flush`` once the producer is done.
    """

    def __init__(self, wrapped: ListUpdateCallback) -> None:
        self._wrapped = wrapped
        self._last_type = _NONE
        self._last_position = -1
        self._last_count = -1
        self._last_payload: Any = None

    def flush(self) -> None:
        if self._last_type == _NONE:
            return
        if self._last_type == _INSERT:
            self._wrapped.on_inserted(self._last_position, self._last_count)
        elif self._last_type == _REMOVE:
            self._wrapped.on_removed(self._last_position, self._last_count)
        else:
            self._wrapped.on_changed(self._last_position, self._last_count, self._last_payload)
        self._last_payload = None
        self._last_type = _NONE

    def on_inserted(self, position: int, count: int) -> None:
        if (
            self._last_type == _INSERT
            and self._last_position <= position <= self._last_position + self._last_count
        ):
            self._last_count += count
            self._last_position = min(position, self._last_position)
            return
        self.flush()
        self._last_position = position
        self._last_count = count
        self._last_type = _INSERT

    def on_removed(self, position: int, count: int) -> None:
        if (
            self._last_type == _REMOVE
            and position <= self._last_position <= position + count
        ):
            self._last_count += count
            self._last_position = position
            return
        self.flush()
        self._last_position = position
        self._last_count = count
        self._last_type = _REMOVE

    def on_moved(self, from_position: int, to_position: int) -> None:
        self.flush()
        self._wrapped.on_moved(from_position, to_position)

    def on_changed(self, position: int, count: int, payload: Any = None) -> None:
        if (
            self._last_type == _CHANGE
            and not (
                position > self._last_position + self._last_count
                or position + count < self._last_position
                or self._last_payload != payload
            )
        ):
            previous_end = self._last_position + self._last_count
            self._last_position = min(position, self._last_position)
            self._last_count = max(previous_end, position + count) - self._last_position
            return
        self.flush()
        self._last_position = position
        self._last_count = count
        self._last_payload = payload
        self._last_type = _CHANGE
