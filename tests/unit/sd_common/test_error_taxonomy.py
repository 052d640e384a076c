"""Tests for shared error helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from sd_common.errors import (
    ConfigurationError,
    DashboardError,
    DiffEngineError,
    ItemPositionError,
    SnapshotLoadError,
    UnknownItemError,
    wrap_error,
)


pytestmark = pytest.mark.unit_common


def test_to_dict_normalizes_context() -> None:
    err = SnapshotLoadError(
        "boom",
        context={
            "path": Path("/tmp/test"),
            "count": 3,
            "nested": {"value": Path("nested")},
            "items": (Path("a"), "b"),
        },
    )
    payload = err.to_dict()
    assert payload["type"] == "SnapshotLoadError"
    assert payload["message"] == "boom"
    assert payload["context"]["path"].endswith("test")
    assert payload["context"]["count"] == 3
    assert payload["context"]["nested"]["value"] == "nested"
    assert payload["context"]["items"] == ["a", "b"]


def test_errors_share_a_base() -> None:
    for error_cls in (
        ConfigurationError,
        DiffEngineError,
        ItemPositionError,
        SnapshotLoadError,
        UnknownItemError,
    ):
        assert issubclass(error_cls, DashboardError)


def test_builtin_bases_for_precondition_errors() -> None:
    assert issubclass(ItemPositionError, IndexError)
    assert issubclass(UnknownItemError, TypeError)


def test_wrap_error_keeps_cause() -> None:
    cause = ValueError("bad value")

    err = wrap_error(ConfigurationError, "invalid", context={"field": "x"}, cause=cause)

    assert isinstance(err, ConfigurationError)
    assert err.__cause__ is cause
    assert err.context == {"field": "x"}
    assert err.error_type == "ConfigurationError"


def test_missing_context_is_empty() -> None:
    assert DashboardError("plain").context == {}
