"""
boring-table CLI entry point.

Usage:
    boring-table version
    boring-table inspect rows.json --page-size 10 --page 2
    boring-table inspect rows.json -c name -c email
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from boring_table import __version__
from boring_table.config import BoringTableSettings
from boring_table.core import BoringTable, Column
from boring_table.logging_config import configure_logging
from boring_table.plugins import PaginationPlugin

app = typer.Typer(
    name="boring-table",
    help="Inspect how the table engine pages through a JSON data set",
    add_completion=False,
)

console = Console()


def load_settings() -> BoringTableSettings:
    """
    Load settings from env vars and .env, and set up logging.

    Returns:
        BoringTableSettings instance
    """
    settings = BoringTableSettings()
    configure_logging(settings.general.log_level, rich=settings.general.rich_logging)
    return settings


def load_rows(rows_file: Path) -> list[dict[str, Any]]:
    """
    Read a JSON array of objects.

    Args:
        rows_file: Path to the JSON file

    Returns:
        List of records
    """
    if not rows_file.exists():
        console.print(f"[red]Rows file not found:[/red] {rows_file}")
        raise typer.Exit(2)

    try:
        rows = json.loads(rows_file.read_text())
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read rows:[/red] {e}")
        raise typer.Exit(2) from e

    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        console.print("[red]Rows file must contain a JSON array of objects[/red]")
        raise typer.Exit(2)

    return rows


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"boring-table {__version__}")


@app.command()
def inspect(
    rows_file: Annotated[Path, typer.Argument(help="JSON file holding an array of objects")],
    columns: Annotated[list[str] | None, typer.Option("--column", "-c", help="Column key (repeatable)")] = None,
    page_size: Annotated[int, typer.Option("--page-size", min=0, help="Rows per page (0: all)")] = 0,
    page: Annotated[int, typer.Option("--page", min=1, help="Page to show")] = 1,
) -> None:
    """
    Show one page of a data set and the published extensions.

    Examples:
        boring-table inspect users.json
        boring-table inspect users.json --page-size 20 --page 3 -c id -c name
    """
    settings = load_settings()
    rows = load_rows(rows_file)

    keys = columns or (list(rows[0]) if rows else [])
    table = BoringTable(
        rows,
        [Column(key, accessor=lambda record, key=key: record.get(key, "")) for key in keys],
        [PaginationPlugin(page_size=page_size)],
        settings=settings,
    )
    table.extensions["go_to_page"](page)

    extensions = table.extensions
    view = Table(title=f"Page {extensions['page']} of {extensions['last_page']} ({extensions['total_items']} rows)")
    for column in table.columns:
        view.add_column(column.label)
    for row in table.custom_body:
        view.add_row(*(str(cell) for cell in row.cells))

    console.print(view)
    console.print_json(data={key: value for key, value in extensions.items() if not callable(value)})


if __name__ == "__main__":
    app()
