"""Tests for the item model."""

from __future__ import annotations

import dataclasses

import pytest

from sd_common.errors import UnknownItemError
from sd_model.items import (
    ITEM_KINDS,
    SPACER,
    CategoryHeader,
    ConditionCard,
    ItemKind,
    Spacer,
    SuggestionCard,
    SuggestionHeader,
    TileCard,
    kind_of,
    title_of,
)
from sd_model.sources import DashboardCategory, DashboardTile, StaticCondition

pytestmark = pytest.mark.unit_model


def test_spacers_are_equal() -> None:
    assert Spacer() == SPACER
    assert SPACER.entity is None


def test_suggestion_header_is_value_type() -> None:
    assert SuggestionHeader(False, 1, 0) == SuggestionHeader(False, 1, 0)
    assert SuggestionHeader(False, 1, 0) != SuggestionHeader(True, 1, 0)


def test_items_are_frozen() -> None:
    header = SuggestionHeader(False, 1, 0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        header.expanded = True  # type: ignore[misc]


def test_kind_and_entity_per_item() -> None:
    condition = StaticCondition(key="a")
    category = DashboardCategory(title="network")
    tile = DashboardTile(title="Wi-Fi")
    header = SuggestionHeader(True, 2, 0)

    cases = [
        (SPACER, ItemKind.SPACER, None),
        (ConditionCard(condition), ItemKind.CONDITION_CARD, condition),
        (header, ItemKind.SUGGESTION_HEADER, header),
        (SuggestionCard(tile), ItemKind.SUGGESTION_CARD, tile),
        (CategoryHeader(category), ItemKind.CATEGORY_HEADER, category),
        (TileCard(tile), ItemKind.TILE, tile),
    ]
    for item, kind, entity in cases:
        assert item.kind is kind
        assert kind_of(item) is kind
        assert item.entity is entity


def test_item_kinds_cover_every_kind() -> None:
    assert set(ITEM_KINDS.values()) == set(ItemKind)


def test_kind_of_rejects_unknown_objects() -> None:
    with pytest.raises(UnknownItemError) as excinfo:
        kind_of(object())

    assert excinfo.value.context["item_type"] == "object"


def test_title_of_handles_missing_values() -> None:
    assert title_of(None) is None
    assert title_of(object()) is None
    assert title_of(DashboardTile(title="Display")) == "Display"
