"""Position lookups over a built item list."""

from __future__ import annotations

from typing import Any, Sequence

from sd_model.items import (
    CategoryHeader,
    ConditionCard,
    Item,
    SuggestionHeader,
    TileCard,
    title_of,
)

POSITION_NOT_FOUND = -1


def position_of_condition(items: Sequence[Item], condition: Any) -> int:
    """Index of the card wrapping this exact condition instance."""
    if condition is None:
        return POSITION_NOT_FOUND
    for position, item in enumerate(items):
        if isinstance(item, ConditionCard) and item.condition is condition:
            return position
    return POSITION_NOT_FOUND


def position_of_tile(items: Sequence[Item], tile: Any) -> int:
    """Index of the first tile card whose tile has the same title.

    Tiles are matched by title rather than instance because providers
    rebuild tile objects on every refresh.
    """
    if tile is None:
        return POSITION_NOT_FOUND
    title = title_of(tile)
    for position, item in enumerate(items):
        if isinstance(item, TileCard) and item.tile is not None and title_of(item.tile) == title:
            return position
    return POSITION_NOT_FOUND


def position_of_category(items: Sequence[Item], category: Any) -> int:
    if category is None:
        return POSITION_NOT_FOUND
    title = title_of(category)
    for position, item in enumerate(items):
        if (
            isinstance(item, CategoryHeader)
            and item.category is not None
            and title_of(item.category) == title
        ):
            return position
    return POSITION_NOT_FOUND


def position_of_suggestion_header(items: Sequence[Item]) -> int:
    for position, item in enumerate(items):
        if isinstance(item, SuggestionHeader):
            return position
    return POSITION_NOT_FOUND
