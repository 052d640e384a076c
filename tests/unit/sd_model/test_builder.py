"""Tests for flattening sources into the dashboard item list."""

from __future__ import annotations

import pytest

from sd_model.builder import build
from sd_model.items import (
    SPACER,
    CategoryHeader,
    ConditionCard,
    Spacer,
    SuggestionCard,
    SuggestionHeader,
    TileCard,
)
from sd_model.sources import DashboardCategory, DashboardTile, StaticCondition
from tests.helpers.dashboard_sources import CountingCondition, make_sources

pytestmark = pytest.mark.unit_model


def test_build_contains_all_data_in_order() -> None:
    sources = make_sources()

    items = build([sources.condition], [sources.category], [sources.suggestion])

    assert items == [
        SPACER,
        ConditionCard(sources.condition),
        SuggestionHeader(expanded=False, shown_count=1, hidden_count=0),
        SuggestionCard(sources.suggestion),
        CategoryHeader(sources.category),
        TileCard(sources.tile),
    ]
    assert items[1].condition is sources.condition
    assert items[3].suggestion is sources.suggestion
    assert items[4].category is sources.category
    assert items[5].tile is sources.tile


@pytest.mark.parametrize(
    "conditions, categories, suggestions",
    [
        (None, None, None),
        ([], [], []),
        (None, [], None),
    ],
)
def test_build_without_sources_is_empty(conditions, categories, suggestions) -> None:
    assert build(conditions, categories, suggestions) == []


def test_build_starts_with_single_spacer_for_any_source() -> None:
    sources = make_sources()

    for items in (
        build([sources.condition]),
        build(categories=[sources.category]),
        build(suggestions=[sources.suggestion]),
    ):
        assert isinstance(items[0], Spacer)
        assert sum(isinstance(item, Spacer) for item in items) == 1


def test_build_skips_hidden_conditions_and_keeps_order() -> None:
    first = StaticCondition(key="a")
    hidden = StaticCondition(key="b", active=False)
    last = StaticCondition(key="c")

    items = build([first, hidden, last])

    assert [item.condition for item in items[1:]] == [first, last]


def test_build_only_hidden_conditions_still_emits_spacer() -> None:
    assert build([StaticCondition(key="a", active=False)]) == [SPACER]


def test_build_evaluates_each_predicate_once() -> None:
    shown = CountingCondition(show=True)
    hidden = CountingCondition(show=False)

    build([shown, hidden], None, None)

    assert shown.calls == 1
    assert hidden.calls == 1


def test_build_collapsed_suggestions_show_one() -> None:
    suggestions = [DashboardTile(title=f"s{i}") for i in range(3)]

    items = build(suggestions=suggestions)

    header = items[1]
    assert header == SuggestionHeader(expanded=False, shown_count=1, hidden_count=2)
    assert items[2:] == [SuggestionCard(suggestions[0])]


def test_build_expanded_suggestions_show_all() -> None:
    suggestions = [DashboardTile(title=f"s{i}") for i in range(3)]

    items = build(suggestions=suggestions, suggestion_expanded=True)

    header = items[1]
    assert header == SuggestionHeader(expanded=True, shown_count=3, hidden_count=0)
    assert [item.suggestion for item in items[2:]] == suggestions


def test_build_collapsed_count_is_capped_by_total() -> None:
    suggestions = [DashboardTile(title="only")]

    items = build(suggestions=suggestions, collapsed_suggestion_count=3)

    header = items[1]
    assert isinstance(header, SuggestionHeader)
    assert header.shown_count == 1
    assert header.hidden_count == 0
    assert header.total_count == 1


def test_build_category_without_tiles_emits_header_only() -> None:
    empty = DashboardCategory(title="empty")
    no_tiles = DashboardCategory(title="none", tiles=None)
    tile = DashboardTile(title="Wi-Fi")
    network = DashboardCategory(title="network", tiles=[tile])

    items = build(categories=[empty, no_tiles, network])

    assert items == [
        SPACER,
        CategoryHeader(empty),
        CategoryHeader(no_tiles),
        CategoryHeader(network),
        TileCard(tile),
    ]


def test_build_accepts_generators(dashboard_sources) -> None:
    sources = dashboard_sources

    items = build(
        (c for c in [sources.condition]),
        (c for c in [sources.category]),
        (s for s in [sources.suggestion]),
    )

    assert len(items) == 6


def test_build_never_copies_references(dashboard_sources) -> None:
    sources = dashboard_sources

    items = build([sources.condition], [sources.category], [sources.suggestion])

    entities = [item.entity for item in items if item.entity is not None]
    assert any(entity is sources.condition for entity in entities)
    assert any(entity is sources.tile for entity in entities)
