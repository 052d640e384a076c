"""Immutable dashboard snapshot: sources, settings and the built item list."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, cast

from sd_common.errors import ItemPositionError
from sd_diff.engine import DiffResult, calculate_diff
from sd_model.builder import build
from sd_model.diff_policy import ItemsDiffPolicy
from sd_model.items import (
    ConditionCard,
    Item,
    ItemKind,
    SuggestionCard,
    SuggestionHeader,
    kind_of,
    title_of,
)
from sd_model.lookup import (
    POSITION_NOT_FOUND,
    position_of_category,
    position_of_condition,
    position_of_suggestion_header,
    position_of_tile,
)
from sd_model.sources import Category, Condition
from sd_app.settings import DashboardSettings


def _freeze(values: Iterable[Any] | None) -> tuple[Any, ...] | None:
    return None if values is None else tuple(values)


@dataclass(frozen=True)
class DashboardData:
    """One built dashboard list and the source snapshots it came from.

    Instances are never mutated; the ``with_*`` helpers return a rebuilt
    copy. Source objects are held by reference.
    """

    conditions: tuple[Condition, ...] | None = None
    categories: tuple[Category, ...] | None = None
    suggestions: tuple[Any, ...] | None = None
    settings: DashboardSettings = field(default_factory=DashboardSettings)
    items: tuple[Item, ...] = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        built = build(
            self.conditions,
            self.categories,
            self.suggestions,
            self.settings.suggestions_expanded,
            collapsed_suggestion_count=self.settings.collapsed_suggestion_count,
        )
        object.__setattr__(self, "items", tuple(built))

    @classmethod
    def build(
        cls,
        conditions: Iterable[Condition] | None = None,
        categories: Iterable[Category] | None = None,
        suggestions: Iterable[Any] | None = None,
        *,
        settings: DashboardSettings | None = None,
    ) -> "DashboardData":
        return cls(
            conditions=_freeze(conditions),
            categories=_freeze(categories),
            suggestions=_freeze(suggestions),
            settings=settings or DashboardSettings(),
        )

    @classmethod
    def empty(cls, settings: DashboardSettings | None = None) -> "DashboardData":
        return cls(settings=settings or DashboardSettings())

    def with_conditions(self, conditions: Iterable[Condition] | None) -> "DashboardData":
        return dataclasses.replace(self, conditions=_freeze(conditions))

    def with_categories(self, categories: Iterable[Category] | None) -> "DashboardData":
        return dataclasses.replace(self, categories=_freeze(categories))

    def with_suggestions(self, suggestions: Iterable[Any] | None) -> "DashboardData":
        return dataclasses.replace(self, suggestions=_freeze(suggestions))

    def with_suggestions_expanded(self, expanded: bool) -> "DashboardData":
        settings = self.settings.model_copy(update={"suggestions_expanded": expanded})
        return dataclasses.replace(self, settings=settings)

    def rebuilt(self) -> "DashboardData":
        """Same sources, rebuilt; picks up changed ``should_show()`` answers."""
        return dataclasses.replace(self)

    # Positional accessors

    @property
    def item_list(self) -> list[Item]:
        return list(self.items)

    @property
    def size(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def item_at(self, position: int) -> Item:
        if not 0 <= position < len(self.items):
            raise ItemPositionError(
                f"Position {position} outside dashboard list of {len(self.items)} items",
                context={"position": position, "size": len(self.items)},
            )
        return self.items[position]

    def entity_at(self, position: int) -> Any:
        return self.item_at(position).entity

    def kind_at(self, position: int) -> ItemKind:
        return kind_of(self.item_at(position))

    def stable_id_at(self, position: int) -> int:
        """Row id that survives in-process rebuilds exactly when the row keeps its identity."""
        return stable_id(self.item_at(position))

    # Lookups

    def position_of_condition(self, condition: Any) -> int:
        return position_of_condition(self.items, condition)

    def position_of_tile(self, tile: Any) -> int:
        return position_of_tile(self.items, tile)

    def position_of_category(self, category: Any) -> int:
        return position_of_category(self.items, category)

    @property
    def has_suggestions(self) -> bool:
        return position_of_suggestion_header(self.items) != POSITION_NOT_FOUND

    @property
    def suggestion_header(self) -> SuggestionHeader | None:
        position = position_of_suggestion_header(self.items)
        if position == POSITION_NOT_FOUND:
            return None
        return cast(SuggestionHeader, self.items[position])

    # Diffing

    def diff_policy(self, previous: "DashboardData" | Sequence[Item]) -> ItemsDiffPolicy:
        old_items = previous.items if isinstance(previous, DashboardData) else previous
        return ItemsDiffPolicy(
            old_items,
            self.items,
            refresh_condition_cards=self.settings.refresh_condition_cards,
        )

    def diff_from(self, previous: "DashboardData" | Sequence[Item]) -> DiffResult:
        """Diff ``previous`` (old) against this snapshot (new).

        With the default ``refresh_condition_cards`` every visible condition
        card is also reported as a ``REFRESH`` change, so identical snapshots
        yield one change per card and adding a condition yields its insert
        plus those changes. Turn the setting off to get no operations for
        identical snapshots and a lone insert for an added condition.
        """
        return calculate_diff(
            self.diff_policy(previous), detect_moves=self.settings.detect_moves
        )


def stable_id(item: Item) -> int:
    """Row id derived from the item kind and its identity key.

    Ids compare equal across snapshots built in the same process. Title keys
    go through ``hash()``, so ids are not stable across processes unless
    ``PYTHONHASHSEED`` is fixed; do not persist them.
    """
    kind = kind_of(item)
    if isinstance(item, (ConditionCard, SuggestionCard)):
        key: Any = id(item.entity)
    elif kind in (ItemKind.CATEGORY_HEADER, ItemKind.TILE):
        key = title_of(item.entity)
    else:
        key = None
    return hash((kind.value, key))
