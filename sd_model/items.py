"""Item model for the flattened dashboard list.

Every row of the rendered dashboard is one of six frozen dataclasses. Data
bearing items wrap a reference owned by an upstream provider; the reference
is shared, never copied. ``Spacer`` and ``SuggestionHeader`` are structural
items synthesized by the builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from sd_common.errors import UnknownItemError


class ItemKind(str, Enum):
    SPACER = "spacer"
    CONDITION_CARD = "condition_card"
    SUGGESTION_HEADER = "suggestion_header"
    SUGGESTION_CARD = "suggestion_card"
    CATEGORY_HEADER = "category_header"
    TILE = "tile"


@dataclass(frozen=True)
class Spacer:
    """Leading blank row; all spacers compare equal."""

    @property
    def kind(self) -> ItemKind:
        return ItemKind.SPACER

    @property
    def entity(self) -> None:
        return None


@dataclass(frozen=True)
class ConditionCard:
    condition: Any

    @property
    def kind(self) -> ItemKind:
        return ItemKind.CONDITION_CARD

    @property
    def entity(self) -> Any:
        return self.condition


@dataclass(frozen=True)
class SuggestionHeader:
    """Header above the suggestion cards, carrying the expand state."""

    expanded: bool
    shown_count: int
    hidden_count: int

    @property
    def kind(self) -> ItemKind:
        return ItemKind.SUGGESTION_HEADER

    @property
    def entity(self) -> "SuggestionHeader":
        return self

    @property
    def total_count(self) -> int:
        return self.shown_count + self.hidden_count


@dataclass(frozen=True)
class SuggestionCard:
    suggestion: Any

    @property
    def kind(self) -> ItemKind:
        return ItemKind.SUGGESTION_CARD

    @property
    def entity(self) -> Any:
        return self.suggestion


@dataclass(frozen=True)
class CategoryHeader:
    category: Any

    @property
    def kind(self) -> ItemKind:
        return ItemKind.CATEGORY_HEADER

    @property
    def entity(self) -> Any:
        return self.category


@dataclass(frozen=True)
class TileCard:
    tile: Any

    @property
    def kind(self) -> ItemKind:
        return ItemKind.TILE

    @property
    def entity(self) -> Any:
        return self.tile


Item = Union[Spacer, ConditionCard, SuggestionHeader, SuggestionCard, CategoryHeader, TileCard]

ITEM_KINDS: dict[type, ItemKind] = {
    Spacer: ItemKind.SPACER,
    ConditionCard: ItemKind.CONDITION_CARD,
    SuggestionHeader: ItemKind.SUGGESTION_HEADER,
    SuggestionCard: ItemKind.SUGGESTION_CARD,
    CategoryHeader: ItemKind.CATEGORY_HEADER,
    TileCard: ItemKind.TILE,
}

SPACER = Spacer()


def kind_of(item: object) -> ItemKind:
    """Return the kind of ``item``, rejecting anything outside the item model."""
    try:
        return ITEM_KINDS[type(item)]
    except KeyError:
        raise UnknownItemError(
            f"Unsupported dashboard item: {type(item).__name__}",
            context={"item_type": type(item).__name__},
        ) from None


def title_of(obj: Any) -> str | None:
    """Display title of a category, tile or suggestion; None when absent."""
    if obj is None:
        return None
    return getattr(obj, "title", None)
