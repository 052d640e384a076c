"""Tests for the dashboard view model update cycle."""

from __future__ import annotations

import logging

import pytest

from sd_app.settings import DashboardSettings
from sd_app.viewmodel import DashboardViewModel
from sd_diff.callbacks import RecordingCallback
from sd_diff.operations import Change, Insert, Remove
from sd_model.diff_policy import ChangePayload
from sd_model.items import ItemKind
from tests.helpers.dashboard_sources import CountingCondition, make_sources

pytestmark = pytest.mark.unit_app


def _view_model(settings: DashboardSettings | None = None) -> tuple[DashboardViewModel, RecordingCallback]:
    vm = DashboardViewModel(settings)
    listener = RecordingCallback()
    vm.add_listener(listener)
    return vm, listener


def test_starts_empty() -> None:
    vm = DashboardViewModel()

    assert vm.data.size == 0
    assert not vm.suggestions_expanded
    assert vm.settings == DashboardSettings()


def test_first_conditions_insert_spacer_and_card() -> None:
    sources = make_sources()
    vm, listener = _view_model()

    operations = vm.set_conditions([sources.condition])

    assert operations == [Insert(0, 2)]
    assert listener.operations == operations
    assert vm.data.kind_at(1) is ItemKind.CONDITION_CARD


def test_adding_suggestions_refreshes_visible_condition() -> None:
    sources = make_sources()
    vm, listener = _view_model()
    vm.set_conditions([sources.condition])

    operations = vm.set_suggestions([sources.suggestion])

    assert operations == [Insert(2, 2), Change(1, 1, ChangePayload.REFRESH)]
    assert listener.operations == [Insert(0, 2), *operations]


def test_adding_suggestions_without_condition_refresh() -> None:
    sources = make_sources()
    vm, _ = _view_model(DashboardSettings(refresh_condition_cards=False))
    vm.set_conditions([sources.condition])

    assert vm.set_suggestions([sources.suggestion]) == [Insert(2, 2)]


def test_toggle_suggestions_changes_header() -> None:
    sources = make_sources()
    vm, _ = _view_model()
    vm.update(conditions=[sources.condition], suggestions=[sources.suggestion])

    operations = vm.toggle_suggestions()

    assert vm.suggestions_expanded
    assert operations == [Change(1, 1, ChangePayload.REFRESH), Change(2, 1, None)]


def test_toggle_suggestions_twice_restores_collapsed_state() -> None:
    sources = make_sources()
    vm, _ = _view_model(DashboardSettings(refresh_condition_cards=False))
    vm.set_suggestions([sources.suggestion])

    assert vm.toggle_suggestions() == [Change(1, 1, None)]
    assert vm.toggle_suggestions() == [Change(1, 1, None)]
    assert not vm.suggestions_expanded


def test_refresh_conditions_removes_hidden_card() -> None:
    sources = make_sources()
    condition = CountingCondition(show=True)
    vm, _ = _view_model()
    vm.update(conditions=[condition], suggestions=[sources.suggestion])

    condition.show = False
    operations = vm.refresh_conditions()

    assert operations == [Remove(1, 1)]
    assert vm.data.position_of_condition(condition) == -1


def test_refresh_conditions_without_changes_is_quiet() -> None:
    sources = make_sources()
    vm, _ = _view_model(DashboardSettings(refresh_condition_cards=False))
    vm.set_conditions([sources.condition])

    assert vm.refresh_conditions() == []


def test_update_keeps_omitted_sources() -> None:
    sources = make_sources()
    vm, _ = _view_model()
    vm.update(conditions=[sources.condition], categories=[sources.category])

    vm.update(suggestions=[sources.suggestion])

    assert vm.data.size == 6
    assert vm.data.position_of_tile(sources.tile) == 5


def test_clearing_every_source_removes_everything() -> None:
    sources = make_sources()
    vm, _ = _view_model()
    vm.update(
        conditions=[sources.condition],
        categories=[sources.category],
        suggestions=[sources.suggestion],
    )

    operations = vm.update(conditions=None, categories=None, suggestions=None)

    assert operations == [Remove(0, 6)]
    assert vm.data.size == 0


def test_removed_listener_stops_receiving() -> None:
    sources = make_sources()
    vm, listener = _view_model()
    vm.add_listener(listener)
    vm.remove_listener(listener)
    vm.remove_listener(listener)

    vm.set_conditions([sources.condition])

    assert listener.operations == []


def test_publish_logs_operation_counts(caplog: pytest.LogCaptureFixture) -> None:
    sources = make_sources()
    vm = DashboardViewModel()

    with caplog.at_level(logging.DEBUG, logger="sd_app.viewmodel"):
        vm.set_conditions([sources.condition])

    messages = [record.getMessage() for record in caplog.records if record.name == "sd_app.viewmodel"]
    assert messages == ["Dashboard update: 0 -> 2 items, operations={'insert': 1}"]
