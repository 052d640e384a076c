"""Tunables for building and diffing the dashboard list."""

from __future__ import annotations

import os
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sd_common.config.env import parse_bool_env, parse_int_env
from sd_common.errors import ConfigurationError

_ENV_FIELDS: dict[str, tuple[str, Callable[[str | None], Any]]] = {
    "suggestions_expanded": ("SD_SUGGESTIONS_EXPANDED", parse_bool_env),
    "collapsed_suggestion_count": ("SD_COLLAPSED_SUGGESTIONS", parse_int_env),
    "refresh_condition_cards": ("SD_REFRESH_CONDITION_CARDS", parse_bool_env),
    "detect_moves": ("SD_DETECT_MOVES", parse_bool_env),
}


class DashboardSettings(BaseModel):
    """Settings shared by the dashboard snapshot and view model."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    suggestions_expanded: bool = Field(
        default=False, description="Show every suggestion instead of the collapsed subset"
    )
    collapsed_suggestion_count: int = Field(
        default=1, ge=1, description="Suggestions shown while the header is collapsed"
    )
    refresh_condition_cards: bool = Field(
        default=True,
        description="Report matched condition cards as changed so views rebind them in place",
    )
    detect_moves: bool = Field(
        default=True, description="Pair removed and inserted rows into move operations"
    )

    @classmethod
    def from_env(cls, **overrides: Any) -> "DashboardSettings":
        """Build settings from explicit overrides, then SD_* variables, then defaults."""
        values: dict[str, Any] = {}
        for name, (env_key, parser) in _ENV_FIELDS.items():
            parsed = parser(os.environ.get(env_key))
            if parsed is not None:
                values[name] = parsed
        values.update({key: val for key, val in overrides.items() if val is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid dashboard settings",
                context={"values": values, "errors": exc.errors(include_url=False)},
                cause=exc,
            ) from exc
