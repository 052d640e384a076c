"""Identity, content and payload rules handed to the list diff engine.

The engine asks ``same_identity`` for candidate pairs, then ``same_content``
and ``payload`` only for pairs it has already matched. All three are total:
they never raise for ``None`` references, and a ``None`` reference never
matches anything.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from sd_model.items import (
    CategoryHeader,
    ConditionCard,
    Item,
    Spacer,
    SuggestionCard,
    SuggestionHeader,
    TileCard,
    kind_of,
    title_of,
)


class ChangePayload(str, Enum):
    """Hints attached to change operations; absence means full rebind."""

    REFRESH = "refresh"


def same_identity(old_item: Item, new_item: Item) -> bool:
    if kind_of(old_item) is not kind_of(new_item):
        return False
    if isinstance(old_item, (Spacer, SuggestionHeader)):
        return True
    if isinstance(old_item, ConditionCard):
        return _same_instance(old_item.condition, new_item.condition)
    if isinstance(old_item, SuggestionCard):
        return _same_instance(old_item.suggestion, new_item.suggestion)
    if isinstance(old_item, CategoryHeader):
        return _same_title(old_item.category, new_item.category)
    if isinstance(old_item, TileCard):
        return _same_title(old_item.tile, new_item.tile)
    return False


def same_content(old_item: Item, new_item: Item, *, refresh_condition_cards: bool = True) -> bool:
    """Compare displayed fields of two items already matched by identity.

    Condition cards read mutable provider state at bind time, so by default
    they are always reported as changed.
    """
    if isinstance(old_item, SuggestionHeader) and isinstance(new_item, SuggestionHeader):
        return (
            old_item.expanded == new_item.expanded
            and old_item.shown_count == new_item.shown_count
            and old_item.hidden_count == new_item.hidden_count
        )
    if isinstance(old_item, ConditionCard):
        if refresh_condition_cards:
            return False
        return isinstance(new_item, ConditionCard) and _same_instance(
            old_item.condition, new_item.condition
        )
    return True


def change_payload(old_item: Item, new_item: Item) -> ChangePayload | None:
    if isinstance(old_item, ConditionCard) and isinstance(new_item, ConditionCard):
        return ChangePayload.REFRESH
    return None


def _same_instance(old_ref: object, new_ref: object) -> bool:
    return old_ref is not None and old_ref is new_ref


def _same_title(old_ref: object, new_ref: object) -> bool:
    if old_ref is None or new_ref is None:
        return False
    return title_of(old_ref) == title_of(new_ref)


class ItemsDiffPolicy:
    """Position-based adapter over two item lists for the diff engine.

    Both lists must come from ``build``; mixing in foreign objects is a
    precondition violation and raises ``UnknownItemError``.
    """

    def __init__(
        self,
        old_items: Sequence[Item],
        new_items: Sequence[Item],
        *,
        refresh_condition_cards: bool = True,
    ) -> None:
        self._old_items = old_items
        self._new_items = new_items
        self._refresh_condition_cards = refresh_condition_cards

    @property
    def old_size(self) -> int:
        return len(self._old_items)

    @property
    def new_size(self) -> int:
        return len(self._new_items)

    def same_identity(self, old_position: int, new_position: int) -> bool:
        return same_identity(self._old_items[old_position], self._new_items[new_position])

    def same_content(self, old_position: int, new_position: int) -> bool:
        return same_content(
            self._old_items[old_position],
            self._new_items[new_position],
            refresh_condition_cards=self._refresh_condition_cards,
        )

    def payload(self, old_position: int, new_position: int) -> ChangePayload | None:
        return change_payload(self._old_items[old_position], self._new_items[new_position])
