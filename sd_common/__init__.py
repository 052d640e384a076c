"""Shared helpers for settings-dashboard."""

from sd_common.errors import DashboardError
from sd_common.logging import configure_logging

__all__ = ["DashboardError", "configure_logging"]
