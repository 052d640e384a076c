"""Core dashboard list model: items, builder, lookups and diff policy."""

from sd_model.builder import build
from sd_model.diff_policy import (
    ChangePayload,
    ItemsDiffPolicy,
    change_payload,
    same_content,
    same_identity,
)
from sd_model.items import (
    SPACER,
    CategoryHeader,
    ConditionCard,
    Item,
    ItemKind,
    Spacer,
    SuggestionCard,
    SuggestionHeader,
    TileCard,
    kind_of,
)
from sd_model.lookup import (
    POSITION_NOT_FOUND,
    position_of_category,
    position_of_condition,
    position_of_suggestion_header,
    position_of_tile,
)
from sd_model.sources import (
    Category,
    Condition,
    DashboardCategory,
    DashboardTile,
    StaticCondition,
    Tile,
)

__all__ = [
    "SPACER",
    "POSITION_NOT_FOUND",
    "Category",
    "CategoryHeader",
    "ChangePayload",
    "Condition",
    "ConditionCard",
    "DashboardCategory",
    "DashboardTile",
    "Item",
    "ItemKind",
    "ItemsDiffPolicy",
    "Spacer",
    "StaticCondition",
    "SuggestionCard",
    "SuggestionHeader",
    "Tile",
    "TileCard",
    "build",
    "change_payload",
    "kind_of",
    "position_of_category",
    "position_of_condition",
    "position_of_suggestion_header",
    "position_of_tile",
    "same_content",
    "same_identity",
]
