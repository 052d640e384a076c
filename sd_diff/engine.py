"""List diff engine: Myers middle-snake search with move detection.

``calculate_diff`` only talks to its input through the ``DiffCallback``
contract (two sizes plus identity, content and payload queries), so any
list whose rows can answer those questions can be diffed. The result is
dispatched as insert/remove/move/change updates, last position first, so
each reported position is valid against the list as already updated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from sd_common.errors import DiffEngineError
from sd_diff.callbacks import BatchingCallback, ListUpdateCallback, RecordingCallback
from sd_diff.operations import UpdateOperation

logger = logging.getLogger(__name__)

NO_POSITION = -1

# Per-position status: matched position shifted left by _FLAG_OFFSET, low bits
# describe how the row was matched. Zero means unmatched.
_FLAG_NOT_CHANGED = 1
_FLAG_CHANGED = 1 << 1
_FLAG_MOVED_CHANGED = 1 << 2
_FLAG_MOVED_NOT_CHANGED = 1 << 3
_FLAG_MOVED = _FLAG_MOVED_CHANGED | _FLAG_MOVED_NOT_CHANGED
_FLAG_OFFSET = 4
_FLAG_MASK = (1 << _FLAG_OFFSET) - 1


class DiffCallback(Protocol):
    """What the engine needs to know about the old and new lists."""

    @property
    def old_size(self) -> int: ...

    @property
    def new_size(self) -> int: ...

    def same_identity(self, old_position: int, new_position: int) -> bool: ...
    def same_content(self, old_position: int, new_position: int) -> bool: ...
    def payload(self, old_position: int, new_position: int) -> Any: ...


@dataclass(frozen=True)
class _Diagonal:
    """Run of ``size`` matched rows starting at old ``x`` / new ``y``."""

    x: int
    y: int
    size: int

    @property
    def end_x(self) -> int:
        return self.x + self.size

    @property
    def end_y(self) -> int:
        return self.y + self.size


@dataclass(frozen=True)
class _Snake:
    start_x: int
    start_y: int
    end_x: int
    end_y: int
    reverse: bool

    def diagonal_size(self) -> int:
        return min(self.end_x - self.start_x, self.end_y - self.start_y)

    def has_addition_or_removal(self) -> bool:
        return self.end_y - self.start_y != self.end_x - self.start_x

    def is_addition(self) -> bool:
        return self.end_y - self.start_y > self.end_x - self.start_x

    def to_diagonal(self) -> _Diagonal:
        if not self.has_addition_or_removal():
            return _Diagonal(self.start_x, self.start_y, self.end_x - self.start_x)
        if self.reverse:
            return _Diagonal(self.start_x, self.start_y, self.diagonal_size())
        if self.is_addition():
            return _Diagonal(self.start_x, self.start_y + 1, self.diagonal_size())
        return _Diagonal(self.start_x + 1, self.start_y, self.diagonal_size())


@dataclass(frozen=True)
class _Range:
    old_start: int
    old_end: int
    new_start: int
    new_end: int

    @property
    def old_size(self) -> int:
        return self.old_end - self.old_start

    @property
    def new_size(self) -> int:
        return self.new_end - self.new_start


@dataclass
class _PostponedUpdate:
    """Half of a move whose other end has not been reached yet."""

    position_in_owner_list: int
    current_position: int
    removal: bool


def calculate_diff(callback: DiffCallback, *, detect_moves: bool = True) -> DiffResult:
    """Compute the update script turning the old list into the new one."""
    diagonals: list[_Diagonal] = []
    stack = [_Range(0, callback.old_size, 0, callback.new_size)]
    while stack:
        current = stack.pop()
        snake = _mid_point(current, callback)
        if snake is None:
            continue
        if snake.diagonal_size() > 0:
            diagonals.append(snake.to_diagonal())
        stack.append(_Range(current.old_start, snake.start_x, current.new_start, snake.start_y))
        stack.append(_Range(snake.end_x, current.old_end, snake.end_y, current.new_end))
    diagonals.sort(key=lambda diagonal: diagonal.x)
    logger.debug(
        "Diffed %d -> %d rows into %d matched runs",
        callback.old_size,
        callback.new_size,
        len(diagonals),
    )
    return DiffResult(callback, diagonals, detect_moves=detect_moves)


def _mid_point(current: _Range, callback: DiffCallback) -> _Snake | None:
    if current.old_size < 1 or current.new_size < 1:
        return None
    max_d = (current.old_size + current.new_size + 1) // 2
    forward = {1: current.old_start}
    backward = {1: current.old_end}
    for d in range(max_d):
        snake = _forward(current, callback, forward, backward, d)
        if snake is not None:
            return snake
        snake = _backward(current, callback, forward, backward, d)
        if snake is not None:
            return snake
    return None


def _forward(
    current: _Range,
    callback: DiffCallback,
    forward: dict[int, int],
    backward: dict[int, int],
    d: int,
) -> _Snake | None:
    check_for_snake = abs(current.old_size - current.new_size) % 2 == 1
    delta = current.old_size - current.new_size
    for k in range(-d, d + 1, 2):
        if k == -d or (k != d and forward[k + 1] > forward[k - 1]):
            start_x = forward[k + 1]
            x = start_x
        else:
            start_x = forward[k - 1]
            x = start_x + 1
        y = current.new_start + (x - current.old_start) - k
        start_y = y if (d == 0 or x != start_x) else y - 1
        while x < current.old_end and y < current.new_end and callback.same_identity(x, y):
            x += 1
            y += 1
        forward[k] = x
        if check_for_snake:
            backward_k = delta - k
            if -d + 1 <= backward_k <= d - 1 and backward[backward_k] <= x:
                return _Snake(start_x, start_y, x, y, reverse=False)
    return None


def _backward(
    current: _Range,
    callback: DiffCallback,
    forward: dict[int, int],
    backward: dict[int, int],
    d: int,
) -> _Snake | None:
    check_for_snake = (current.old_size - current.new_size) % 2 == 0
    delta = current.old_size - current.new_size
    for k in range(-d, d + 1, 2):
        if k == -d or (k != d and backward[k + 1] < backward[k - 1]):
            start_x = backward[k + 1]
            x = start_x
        else:
            start_x = backward[k - 1]
            x = start_x - 1
        y = current.new_end - ((current.old_end - x) - k)
        start_y = y if (d == 0 or x != start_x) else y + 1
        while (
            x > current.old_start
            and y > current.new_start
            and callback.same_identity(x - 1, y - 1)
        ):
            x -= 1
            y -= 1
        backward[k] = x
        if check_for_snake:
            forward_k = delta - k
            if -d <= forward_k <= d and forward[forward_k] >= x:
                return _Snake(x, y, start_x, start_y, reverse=True)
    return None


class DiffResult:
    """Matched rows between two lists, ready to be dispatched as updates."""

    def __init__(
        self,
        callback: DiffCallback,
        diagonals: list[_Diagonal],
        *,
        detect_moves: bool = True,
    ) -> None:
        self._callback = callback
        self._diagonals = diagonals
        self._old_size = callback.old_size
        self._new_size = callback.new_size
        self._old_statuses = [0] * self._old_size
        self._new_statuses = [0] * self._new_size
        self._detect_moves = detect_moves
        self._add_edge_diagonals()
        self._find_matching_items()

    @property
    def old_size(self) -> int:
        return self._old_size

    @property
    def new_size(self) -> int:
        return self._new_size

    def _add_edge_diagonals(self) -> None:
        first = self._diagonals[0] if self._diagonals else None
        if first is None or first.x != 0 or first.y != 0:
            self._diagonals.insert(0, _Diagonal(0, 0, 0))
        self._diagonals.append(_Diagonal(self._old_size, self._new_size, 0))

    def _find_matching_items(self) -> None:
        for diagonal in self._diagonals:
            for offset in range(diagonal.size):
                pos_x = diagonal.x + offset
                pos_y = diagonal.y + offset
                if self._callback.same_content(pos_x, pos_y):
                    flag = _FLAG_NOT_CHANGED
                else:
                    flag = _FLAG_CHANGED
                self._old_statuses[pos_x] = (pos_y << _FLAG_OFFSET) | flag
                self._new_statuses[pos_y] = (pos_x << _FLAG_OFFSET) | flag
        if self._detect_moves:
            self._find_move_matches()

    def _find_move_matches(self) -> None:
        pos_x = 0
        for diagonal in self._diagonals:
            while pos_x < diagonal.x:
                if self._old_statuses[pos_x] == 0:
                    self._find_matching_addition(pos_x)
                pos_x += 1
            pos_x = diagonal.end_x

    def _find_matching_addition(self, pos_x: int) -> None:
        pos_y = 0
        for diagonal in self._diagonals:
            while pos_y < diagonal.y:
                if self._new_statuses[pos_y] == 0 and self._callback.same_identity(pos_x, pos_y):
                    if self._callback.same_content(pos_x, pos_y):
                        flag = _FLAG_MOVED_NOT_CHANGED
                    else:
                        flag = _FLAG_MOVED_CHANGED
                    self._old_statuses[pos_x] = (pos_y << _FLAG_OFFSET) | flag
                    self._new_statuses[pos_y] = (pos_x << _FLAG_OFFSET) | flag
                    return
                pos_y += 1
            pos_y = diagonal.end_y

    def convert_old_position_to_new(self, old_position: int) -> int:
        """New position of an old row, or ``NO_POSITION`` if it was removed."""
        if not 0 <= old_position < self._old_size:
            raise DiffEngineError(
                f"Old position {old_position} out of range",
                context={"position": old_position, "old_size": self._old_size},
            )
        status = self._old_statuses[old_position]
        if (status & _FLAG_MASK) == 0:
            return NO_POSITION
        return status >> _FLAG_OFFSET

    def convert_new_position_to_old(self, new_position: int) -> int:
        """Old position of a new row, or ``NO_POSITION`` if it was inserted."""
        if not 0 <= new_position < self._new_size:
            raise DiffEngineError(
                f"New position {new_position} out of range",
                context={"position": new_position, "new_size": self._new_size},
            )
        status = self._new_statuses[new_position]
        if (status & _FLAG_MASK) == 0:
            return NO_POSITION
        return status >> _FLAG_OFFSET

    def operations(self) -> list[UpdateOperation]:
        """Dispatch into a recorder and return the batched operations."""
        recorder = RecordingCallback()
        self.dispatch_updates_to(recorder)
        return recorder.operations

    def dispatch_updates_to(self, update_callback: ListUpdateCallback) -> None:
        if isinstance(update_callback, BatchingCallback):
            batching = update_callback
        else:
            batching = BatchingCallback(update_callback)

        callback = self._callback
        current_list_size = self._old_size
        postponed: list[_PostponedUpdate] = []
        pos_x = self._old_size
        pos_y = self._new_size
        for diagonal in reversed(self._diagonals):
            end_x = diagonal.end_x
            end_y = diagonal.end_y
            # Old rows after this run: removals, or the source end of a move.
            while pos_x > end_x:
                pos_x -= 1
                status = self._old_statuses[pos_x]
                if status & _FLAG_MOVED:
                    new_position = status >> _FLAG_OFFSET
                    update = _pop_postponed_update(postponed, new_position, removal=False)
                    if update is not None:
                        updated_new_position = current_list_size - update.current_position
                        batching.on_moved(pos_x, updated_new_position - 1)
                        if status & _FLAG_MOVED_CHANGED:
                            payload = callback.payload(pos_x, new_position)
                            batching.on_changed(updated_new_position - 1, 1, payload)
                    else:
                        postponed.append(
                            _PostponedUpdate(pos_x, current_list_size - pos_x - 1, removal=True)
                        )
                else:
                    batching.on_removed(pos_x, 1)
                    current_list_size -= 1
            # New rows after this run: insertions, or the target end of a move.
            while pos_y > end_y:
                pos_y -= 1
                status = self._new_statuses[pos_y]
                if status & _FLAG_MOVED:
                    old_position = status >> _FLAG_OFFSET
                    update = _pop_postponed_update(postponed, old_position, removal=True)
                    if update is None:
                        postponed.append(
                            _PostponedUpdate(pos_y, current_list_size - pos_x, removal=False)
                        )
                    else:
                        updated_old_position = current_list_size - update.current_position - 1
                        batching.on_moved(updated_old_position, pos_x)
                        if status & _FLAG_MOVED_CHANGED:
                            payload = callback.payload(old_position, pos_y)
                            batching.on_changed(pos_x, 1, payload)
                else:
                    batching.on_inserted(pos_x, 1)
                    current_list_size += 1
            pos_x = diagonal.x
            pos_y = diagonal.y
            for offset in range(diagonal.size):
                if (self._old_statuses[pos_x + offset] & _FLAG_MASK) == _FLAG_CHANGED:
                    payload = callback.payload(pos_x + offset, pos_y + offset)
                    batching.on_changed(pos_x + offset, 1, payload)
        batching.flush()


def _pop_postponed_update(
    postponed: list[_PostponedUpdate], position: int, *, removal: bool
) -> _PostponedUpdate | None:
    for index, update in enumerate(postponed):
        if update.position_in_owner_list == position and update.removal == removal:
            del postponed[index]
            for later in postponed[index:]:
                later.current_position += -1 if removal else 1
            return update
    return None
