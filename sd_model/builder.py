"""Flatten conditions, suggestions and categories into one item list."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from sd_model.items import (
    SPACER,
    CategoryHeader,
    ConditionCard,
    Item,
    SuggestionCard,
    SuggestionHeader,
    TileCard,
)
from sd_model.sources import Category, Condition

logger = logging.getLogger(__name__)

DEFAULT_COLLAPSED_SUGGESTION_COUNT = 1


def build(
    conditions: Iterable[Condition] | None = None,
    categories: Iterable[Category] | None = None,
    suggestions: Iterable[Any] | None = None,
    suggestion_expanded: bool = False,
    *,
    collapsed_suggestion_count: int = DEFAULT_COLLAPSED_SUGGESTION_COUNT,
) -> list[Item]:
    """Build the ordered dashboard item list.

    Layout: ``[Spacer] ConditionCard* [SuggestionHeader SuggestionCard*]
    (CategoryHeader TileCard*)*``. ``None`` sources contribute nothing and
    the list is empty when every source is empty. Each condition's
    ``should_show()`` is evaluated exactly once.
    """
    condition_list = list(conditions or ())
    category_list = list(categories or ())
    suggestion_list = list(suggestions or ())

    if not (condition_list or category_list or suggestion_list):
        logger.debug("Built empty dashboard item list")
        return []

    items: list[Item] = [SPACER]
    items.extend(_condition_items(condition_list))
    items.extend(
        _suggestion_items(suggestion_list, suggestion_expanded, collapsed_suggestion_count)
    )
    items.extend(_category_items(category_list))

    logger.debug(
        "Built dashboard item list: %d items (%d conditions, %d suggestions, %d categories)",
        len(items),
        len(condition_list),
        len(suggestion_list),
        len(category_list),
    )
    return items


def _condition_items(conditions: list[Condition]) -> list[Item]:
    return [ConditionCard(condition) for condition in conditions if condition.should_show()]


def _suggestion_items(
    suggestions: list[Any], expanded: bool, collapsed_count: int
) -> list[Item]:
    if not suggestions:
        return []
    total = len(suggestions)
    shown = total if expanded else min(total, collapsed_count)
    header = SuggestionHeader(expanded=expanded, shown_count=shown, hidden_count=total - shown)
    return [header, *(SuggestionCard(suggestion) for suggestion in suggestions[:shown])]


def _category_items(categories: list[Category]) -> list[Item]:
    items: list[Item] = []
    for category in categories:
        items.append(CategoryHeader(category))
        tiles = getattr(category, "tiles", None) or ()
        items.extend(TileCard(tile) for tile in tiles)
    return items
