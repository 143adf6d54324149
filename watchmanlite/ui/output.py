"""
Terminal rendering for command results.
Heavy dependencies (Rich) are isolated here so the library modules stay
import-light.
"""

import json

from rich.console import Console
from rich.table import Table

from watchmanlite.query.fields import Field
from watchmanlite.query.results import QueryResult, WatchList

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]", highlight=False)


def print_watch_list(watch_list: WatchList) -> None:
    if not watch_list.roots:
        console.print("[dim]No watched roots[/dim]")
        return
    for root in watch_list:
        console.print(root, highlight=False)


def print_query_result(result: QueryResult, fields: int) -> None:
    """Render query results as a table with one column per requested field."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", overflow="fold")
    show_exists = bool(fields & Field.EXISTS)
    show_size = bool(fields & Field.SIZE)
    show_new = bool(fields & Field.NEW)
    if show_exists:
        table.add_column("Exists")
    if show_size:
        table.add_column("Size", justify="right")
    if show_new:
        table.add_column("New")

    for file_stat in result.files:
        row = [file_stat.name]
        if show_exists:
            row.append("yes" if file_stat.exists else "no")
        if show_size:
            row.append(str(file_stat.size))
        if show_new:
            row.append("yes" if file_stat.is_new else "")
        table.add_row(*row)

    console.print(table)
    fresh = " (fresh instance)" if result.is_fresh_instance else ""
    console.print(
        f"[dim]{len(result.files)} files, clock {result.clock}{fresh}[/dim]",
        highlight=False,
    )


def print_query_json(result: QueryResult) -> None:
    """Print the result as JSON, one object, for scripting."""
    payload = {
        "version": result.version,
        "clock": result.clock,
        "is_fresh_instance": result.is_fresh_instance,
        "files": [
            {
                "name": s.name,
                "exists": s.exists,
                "mode": s.mode,
                "new": s.is_new,
                "size": s.size,
            }
            for s in result.files
        ],
    }
    console.print_json(json.dumps(payload))
