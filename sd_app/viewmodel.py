"""Dashboard view model driving build-and-diff cycles (UI-agnostic)."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable

from sd_app.dashboard import DashboardData
from sd_app.settings import DashboardSettings
from sd_diff.callbacks import FanOutCallback, ListUpdateCallback, RecordingCallback
from sd_diff.operations import UpdateOperation
from sd_model.sources import Category, Condition

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class DashboardViewModel:
    """Hold the current dashboard snapshot and publish incremental updates.

    Every mutator rebuilds the list from the current source snapshots,
    diffs the previous list against it and forwards the operations to the
    registered listeners before returning them. Calls must not overlap;
    callers hand in consistent source snapshots.
    """

    def __init__(self, settings: DashboardSettings | None = None) -> None:
        self._data = DashboardData.empty(settings or DashboardSettings())
        self._listeners: list[ListUpdateCallback] = []

    @property
    def data(self) -> DashboardData:
        return self._data

    @property
    def settings(self) -> DashboardSettings:
        return self._data.settings

    @property
    def suggestions_expanded(self) -> bool:
        return self._data.settings.suggestions_expanded

    def add_listener(self, listener: ListUpdateCallback) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ListUpdateCallback) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_conditions(self, conditions: Iterable[Condition] | None) -> list[UpdateOperation]:
        return self.update(conditions=conditions)

    def set_categories(self, categories: Iterable[Category] | None) -> list[UpdateOperation]:
        return self.update(categories=categories)

    def set_suggestions(self, suggestions: Iterable[Any] | None) -> list[UpdateOperation]:
        return self.update(suggestions=suggestions)

    def toggle_suggestions(self) -> list[UpdateOperation]:
        return self._publish(
            self._data.with_suggestions_expanded(not self.suggestions_expanded),
            reason="toggle_suggestions",
        )

    def refresh_conditions(self) -> list[UpdateOperation]:
        """Re-evaluate ``should_show()`` on the current conditions."""
        return self._publish(self._data.rebuilt(), reason="refresh_conditions")

    def update(
        self,
        *,
        conditions: Iterable[Condition] | None = _UNSET,
        categories: Iterable[Category] | None = _UNSET,
        suggestions: Iterable[Any] | None = _UNSET,
    ) -> list[UpdateOperation]:
        """Replace any subset of the sources in a single cycle.

        Omitted sources keep their current snapshot; ``None`` clears one.
        """
        data = self._data
        if conditions is not _UNSET:
            data = data.with_conditions(conditions)
        if categories is not _UNSET:
            data = data.with_categories(categories)
        if suggestions is not _UNSET:
            data = data.with_suggestions(suggestions)
        return self._publish(data, reason="update")

    def _publish(self, new_data: DashboardData, *, reason: str) -> list[UpdateOperation]:
        previous = self._data
        result = new_data.diff_from(previous)
        self._data = new_data

        recorder = RecordingCallback()
        result.dispatch_updates_to(FanOutCallback([recorder, *self._listeners]))

        counts = Counter(type(op).__name__.lower() for op in recorder.operations)
        logger.debug(
            "Dashboard %s: %d -> %d items, operations=%s",
            reason,
            previous.size,
            new_data.size,
            dict(counts),
        )
        return recorder.operations
