"""Contracts for the upstream data providers, plus plain implementations.

Providers own these objects and may mutate them between build cycles. The
builder and the diff policy only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class Condition(Protocol):
    """A status card source that decides whether it is currently visible."""

    def should_show(self) -> bool: ...


@runtime_checkable
class Tile(Protocol):
    title: str | None


@runtime_checkable
class Category(Protocol):
    title: str | None
    tiles: Sequence[Tile] | None


@dataclass(eq=False)
class StaticCondition:
    """Condition whose visibility is a plain mutable flag."""

    key: str
    title: str = ""
    summary: str = ""
    active: bool = True

    def should_show(self) -> bool:
        return self.active


@dataclass(eq=False)
class DashboardTile:
    """Tile or suggestion entry shown as a single card."""

    title: str | None
    summary: str | None = None
    key: str | None = None


@dataclass(eq=False)
class DashboardCategory:
    title: str | None
    tiles: list[DashboardTile] = field(default_factory=list)
    key: str | None = None
