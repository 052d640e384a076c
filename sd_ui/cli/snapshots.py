"""Load dashboard source snapshots from JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from sd_common.errors import SnapshotLoadError, wrap_error
from sd_model.sources import DashboardCategory, DashboardTile, StaticCondition


class ConditionEntry(BaseModel):
    key: str = Field(min_length=1, description="Stable key; same key means same condition")
    title: str = ""
    summary: str = ""
    active: bool = True


class TileEntry(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    key: Optional[str] = None


class CategoryEntry(BaseModel):
    title: Optional[str] = None
    tiles: Optional[list[TileEntry]] = Field(default_factory=list)


class SnapshotFile(BaseModel):
    """One set of source snapshots; a null or missing list means absent."""

    conditions: Optional[list[ConditionEntry]] = None
    categories: Optional[list[CategoryEntry]] = None
    suggestions: Optional[list[TileEntry]] = None


@dataclass
class SourceSnapshot:
    conditions: Optional[list[StaticCondition]] = None
    categories: Optional[list[DashboardCategory]] = None
    suggestions: Optional[list[DashboardTile]] = None


class SourceRegistry:
    """Hand out one shared object per condition and suggestion key.

    Loading several snapshot files through one registry makes entries with
    the same key the same instance, the way a live provider keeps its
    objects between refreshes. Categories and tiles are rebuilt on every
    load; they are matched by title.
    """

    def __init__(self) -> None:
        self._conditions: dict[str, StaticCondition] = {}
        self._suggestions: dict[str, DashboardTile] = {}

    def condition(self, entry: ConditionEntry) -> StaticCondition:
        condition = self._conditions.get(entry.key)
        if condition is None:
            condition = StaticCondition(key=entry.key)
            self._conditions[entry.key] = condition
        condition.title = entry.title
        condition.summary = entry.summary
        condition.active = entry.active
        return condition

    def suggestion(self, entry: TileEntry) -> DashboardTile:
        key = entry.key or entry.title or ""
        suggestion = self._suggestions.get(key)
        if suggestion is None:
            suggestion = DashboardTile(title=entry.title, key=key)
            self._suggestions[key] = suggestion
        suggestion.title = entry.title
        suggestion.summary = entry.summary
        return suggestion

    def resolve(self, snapshot: SnapshotFile) -> SourceSnapshot:
        conditions = None
        if snapshot.conditions is not None:
            conditions = [self.condition(entry) for entry in snapshot.conditions]
        suggestions = None
        if snapshot.suggestions is not None:
            suggestions = [self.suggestion(entry) for entry in snapshot.suggestions]
        categories = None
        if snapshot.categories is not None:
            categories = [
                DashboardCategory(
                    title=entry.title,
                    tiles=[
                        DashboardTile(title=tile.title, summary=tile.summary, key=tile.key)
                        for tile in entry.tiles or []
                    ],
                )
                for entry in snapshot.categories
            ]
        return SourceSnapshot(conditions=conditions, categories=categories, suggestions=suggestions)


def read_snapshot_file(path: Path) -> SnapshotFile:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise wrap_error(
            SnapshotLoadError,
            f"Cannot read snapshot {path}: {exc}",
            context={"path": path},
            cause=exc,
        ) from exc
    try:
        return SnapshotFile.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotLoadError(
            f"Invalid snapshot {path}: {exc.error_count()} validation error(s)",
            context={"path": path, "errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc
