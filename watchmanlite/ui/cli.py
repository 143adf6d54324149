"""Main CLI entry point - one subcommand per daemon command."""

import logging
from typing import List, Optional

import typer

from watchmanlite.core.configs import ClientConfig, get_client_config
from watchmanlite.daemon.client import WatchmanClient
from watchmanlite.daemon.discovery import get_sockname
from watchmanlite.errors import WatchmanError
from watchmanlite.query.expression import (
    Expression,
    allof_expression,
    anyof_expression,
    name_expression,
    since_expression,
    suffix_expression,
    true_expression,
    type_expression,
)
from watchmanlite.query.fields import Field, parse_fields
from watchmanlite.ui.output import (
    print_error,
    print_query_json,
    print_query_result,
    print_success,
    print_watch_list,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="watchmanlite - talk to the watchman file-watching daemon.",
)


# ============================================================================
# Shared Setup
# ============================================================================

@app.callback()
def main(
    ctx: typer.Context,
    sockname: Optional[str] = typer.Option(
        None, "--sockname", help="Daemon socket path (skips get-sockname)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Socket timeout in seconds"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log protocol traffic"),
) -> None:
    """Load configuration and set up logging for every subcommand."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = get_client_config()
    except ValueError as e:
        print_error(f"Error loading configuration: {e}")
        raise typer.Exit(1)

    if sockname is not None:
        config.sockname = sockname
    if timeout is not None:
        config.timeout = timeout if timeout > 0 else None
    ctx.obj = config


def _open_client(config: ClientConfig) -> WatchmanClient:
    """Connect using the loaded configuration. Exits on error."""
    try:
        return WatchmanClient.connect(
            sockname=config.sockname,
            timeout=config.timeout,
            binary=config.binary,
        )
    except WatchmanError as e:
        print_error(e.message)
        raise typer.Exit(1)


def build_expression(
    suffixes: List[str],
    names: List[str],
    since: Optional[str],
    file_type: Optional[str],
) -> Expression:
    """Combine CLI filters into one expression; no filters matches everything."""
    clauses: List[Expression] = []
    if file_type:
        clauses.append(type_expression(file_type))
    if since:
        clauses.append(since_expression(since))
    if names:
        clauses.append(name_expression(names))
    if len(suffixes) == 1:
        clauses.append(suffix_expression(suffixes[0]))
    elif suffixes:
        clauses.append(anyof_expression(*(suffix_expression(s) for s in suffixes)))

    if not clauses:
        return true_expression()
    if len(clauses) == 1:
        return clauses[0]
    return allof_expression(*clauses)


# ============================================================================
# Commands
# ============================================================================

@app.command("sockname")
def sockname_command(ctx: typer.Context) -> None:
    """Print the daemon socket path."""
    config: ClientConfig = ctx.obj
    if config.sockname:
        typer.echo(config.sockname)
        return
    try:
        typer.echo(get_sockname(binary=config.binary, timeout=config.timeout))
    except WatchmanError as e:
        print_error(e.message)
        raise typer.Exit(1)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Root directory to watch"),
) -> None:
    """Start watching a root."""
    with _open_client(ctx.obj) as client:
        try:
            client.watch(path)
        except WatchmanError as e:
            print_error(e.message)
            raise typer.Exit(1)
    print_success(f"Watching {path}")


@app.command("watch-del")
def watch_del_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Root directory to stop watching"),
) -> None:
    """Stop watching a root."""
    with _open_client(ctx.obj) as client:
        try:
            client.watch_del(path)
        except WatchmanError as e:
            print_error(e.message)
            raise typer.Exit(1)
    print_success(f"Stopped watching {path}")


@app.command("watch-list")
def watch_list_command(ctx: typer.Context) -> None:
    """List watched roots."""
    with _open_client(ctx.obj) as client:
        try:
            roots = client.watch_list()
        except WatchmanError as e:
            print_error(e.message)
            raise typer.Exit(1)
    print_watch_list(roots)


@app.command("query")
def query_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Watched root to query"),
    suffix: Optional[List[str]] = typer.Option(
        None, "--suffix", "-s", help="File suffix without the dot (repeatable)"
    ),
    name: Optional[List[str]] = typer.Option(
        None, "--name", "-n", help="Exact file name (repeatable)"
    ),
    since: Optional[str] = typer.Option(None, "--since", help="Clock from a previous query"),
    file_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="File type: f, d, l, ..."
    ),
    field: Optional[List[str]] = typer.Option(
        None, "--field", "-f", help="Result field to request (repeatable, default: name)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """
    Query files under a watched root.

    Example: watchmanlite query ~/src/project -s py -t f -f name -f size
    """
    try:
        expression = build_expression(suffix or [], name or [], since, file_type)
        fields = parse_fields(field) if field else Field.NAME
    except (TypeError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(2)
    terms = [node.type.value for node in expression.walk()]
    logger.debug(f"query expression ({len(terms)} terms: {', '.join(terms)}): {expression.to_json()}")

    with _open_client(ctx.obj) as client:
        try:
            result = client.query(path, expression, fields)
        except WatchmanError as e:
            print_error(e.message)
            raise typer.Exit(1)

    if as_json:
        print_query_json(result)
    else:
        print_query_result(result, fields)


def run() -> None:
    """Console script entry point."""
    app()
