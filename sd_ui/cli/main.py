"""
Command-line interface for settings-dashboard.

Prints the flattened dashboard list for a snapshot file and the update
operations between two snapshot files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import typer
from rich.console import Console
from rich.table import Table

from sd_app.dashboard import DashboardData
from sd_app.settings import DashboardSettings
from sd_common.errors import DashboardError
from sd_common.logging import configure_logging
from sd_diff.operations import describe
from sd_model.items import Item, SuggestionHeader, kind_of, title_of
from sd_ui.cli.snapshots import SourceRegistry, SourceSnapshot, read_snapshot_file

console = Console()

app = typer.Typer(help="Inspect dashboard item lists and their incremental updates.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, force=True)


def _show_table(title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
    table = Table(title=f"[b]{title}[/b]", header_style="bold", row_styles=("", "dim"))
    for column in columns:
        table.add_column(column, overflow="fold")
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


def _label(item: Item) -> str:
    if isinstance(item, SuggestionHeader):
        state = "expanded" if item.expanded else "collapsed"
        return f"{state}, {item.shown_count} shown, {item.hidden_count} hidden"
    entity: Any = item.entity
    if entity is None:
        return ""
    return str(title_of(entity) or getattr(entity, "key", "") or "")


def _load(path: Path, registry: SourceRegistry) -> SourceSnapshot:
    try:
        return registry.resolve(read_snapshot_file(path))
    except DashboardError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(2) from exc


def _settings(**overrides: Any) -> DashboardSettings:
    try:
        return DashboardSettings.from_env(**overrides)
    except DashboardError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(2) from exc


def _data(snapshot: SourceSnapshot, settings: DashboardSettings) -> DashboardData:
    return DashboardData.build(
        snapshot.conditions,
        snapshot.categories,
        snapshot.suggestions,
        settings=settings,
    )


@app.command("build")
def build_command(
    snapshot: Path = typer.Argument(..., help="Snapshot JSON file."),
    expanded: bool = typer.Option(False, "--expanded", help="Expand the suggestion list."),
) -> None:
    """Print the flattened item list for one snapshot."""
    settings = _settings(suggestions_expanded=expanded or None)
    data = _data(_load(snapshot, SourceRegistry()), settings)
    if not data.size:
        console.print("Dashboard list is empty.")
        return
    rows = [
        [str(position), kind_of(item).value, _label(item)]
        for position, item in enumerate(data.items)
    ]
    _show_table("Dashboard Items", ["Position", "Kind", "Label"], rows)


@app.command("diff")
def diff_command(
    old: Path = typer.Argument(..., help="Snapshot JSON file before the change."),
    new: Path = typer.Argument(..., help="Snapshot JSON file after the change."),
    no_moves: bool = typer.Option(False, "--no-moves", help="Report moves as remove + insert."),
    no_condition_refresh: bool = typer.Option(
        False,
        "--no-condition-refresh",
        help="Treat unchanged condition cards as unchanged rows.",
    ),
) -> None:
    """Print the update operations turning OLD into NEW."""
    settings = _settings(
        detect_moves=False if no_moves else None,
        refresh_condition_cards=False if no_condition_refresh else None,
    )
    registry = SourceRegistry()
    # Build the old list before loading NEW: loading mutates shared conditions.
    previous = _data(_load(old, registry), settings)
    current = _data(_load(new, registry), settings)
    operations = current.diff_from(previous).operations()
    if not operations:
        console.print("No changes.")
        return
    rows = [[str(index), type(op).__name__, describe(op)] for index, op in enumerate(operations)]
    _show_table(
        f"Updates ({previous.size} -> {current.size} items)",
        ["#", "Operation", "Details"],
        rows,
    )


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
