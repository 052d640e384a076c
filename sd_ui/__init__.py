"""Developer-facing command line tools for settings-dashboard."""
