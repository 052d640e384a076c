"""Application layer: dashboard snapshots, view model and settings."""

from sd_app.dashboard import DashboardData
from sd_app.settings import DashboardSettings
from sd_app.viewmodel import DashboardViewModel

__all__ = ["DashboardData", "DashboardSettings", "DashboardViewModel"]
