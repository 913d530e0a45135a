"""
CLI entry point for jot.

This module provides the Typer-based command-line interface for jot.

Commands:
    add         Jot a new thought
    list        List the most recent thoughts
    delete      Soft-delete a thought by id
    where       Show where the database lives

Architecture Note:
    The CLI is intentionally thin - it parses arguments, asks for
    confirmation and formats output. Everything that touches the database
    goes through jot.store.
"""

import json
import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer.core import TyperCommand

from jot import __version__
from jot.errors import JotError
from jot.schema import JotConfig, StoreConfig, load_config, locate_config
from jot.store import open_store, resolve_data_dir, resolve_db_path

# Initialize Typer app with metadata
app = typer.Typer(
    name="jot",
    help="Just-Output-Thoughts: jot quick notes to a local SQLite database.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()


@dataclass
class CliState:
    """Options shared by every command."""

    store_config: StoreConfig
    config_path: Path | None = None
    debug: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]jot[/bold] version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send jot's log records to stderr through Rich."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    jot_logger = logging.getLogger("jot")
    jot_logger.handlers = [handler]
    jot_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            help="Directory holding jot.db. Overrides JOT_DATA_DIR.",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            help="Path to a YAML config file. Overrides JOT_CONFIG.",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable debug logging on stderr.",
        ),
    ] = False,
) -> None:
    """
    jot - Just-Output-Thoughts.

    Capture short thoughts, list the latest ones and soft-delete
    the ones you no longer need.
    """
    _configure_logging(verbose)
    ctx.obj = CliState(
        store_config=StoreConfig(data_dir=data_dir),
        config_path=config,
        debug=verbose,
    )


def _fail(error: Exception, state: CliState) -> NoReturn:
    """Report an error and exit non-zero."""
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if state.debug:
        console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
    raise typer.Exit(code=1)


def _load_settings(state: CliState) -> JotConfig:
    """Load user preferences, falling back to defaults."""
    store_config = state.store_config
    data_dir = resolve_data_dir(store_config.app_name, store_config.data_dir)
    path = locate_config(state.config_path, data_dir)
    if path is None:
        return JotConfig()
    return load_config(path)


DASH_HINT = (
    "If your thought has words starting with '-', put `--` before it.\n"
    "Example: jot add -- -5 degrees this morning"
)


class ThoughtCommand(TyperCommand):
    """Command whose trailing words are free text."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as e:
            e.message = f"{e.message}\n{DASH_HINT}"
            raise


@app.command(cls=ThoughtCommand)
def add(
    ctx: typer.Context,
    words: Annotated[
        list[str],
        typer.Argument(
            help="The thought. Put `--` first if it starts with a dash.",
            metavar="TEXT...",
        ),
    ],
) -> None:
    """
    Jot a new thought.

    Example:
        $ jot add call the dentist tomorrow
        $ jot add -- -5 degrees this morning
    """
    state: CliState = ctx.obj
    text = " ".join(words).strip()
    if not text:
        console.print("[red]Nothing to jot. Provide some text.[/red]")
        raise typer.Exit(code=1)

    try:
        with open_store(state.store_config) as store:
            thought_id = store.add_thought(text)
    except JotError as e:
        _fail(e, state)

    console.print(f"Jotted [cyan]#{thought_id}[/cyan]: {escape(text)}")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    limit: Annotated[
        Optional[int],
        typer.Option(
            "--limit",
            "-n",
            help="Number of thoughts to show (default 7). Use -1 for all.",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output thoughts in JSON format.",
        ),
    ] = False,
) -> None:
    """
    List the most recent thoughts, newest first.

    Example:
        $ jot list -n 3
    """
    state: CliState = ctx.obj
    try:
        settings = _load_settings(state)
        if limit is None:
            limit = settings.list_limit
        with open_store(state.store_config) as store:
            thoughts = store.list_thoughts(limit)
    except JotError as e:
        _fail(e, state)

    if json_output:
        print(json.dumps([t.model_dump() for t in thoughts], indent=2))
        return

    if not thoughts:
        console.print("[dim]No thoughts yet. Try: jot add your first thought[/dim]")
        return

    for t in thoughts:
        console.print(
            f"[cyan]#{t.id}[/cyan]  {escape(t.text)}  [dim]·  {t.created_at}[/dim]"
        )


@app.command()
def delete(
    ctx: typer.Context,
    thought_id: Annotated[
        int,
        typer.Argument(help="Id of the thought to delete.", metavar="ID"),
    ],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip the confirmation prompt.",
        ),
    ] = False,
) -> None:
    """
    Soft-delete a thought by id.

    The thought is hidden from `jot list` but kept in the database.

    Example:
        $ jot delete 12
    """
    state: CliState = ctx.obj
    try:
        settings = _load_settings(state)
        with open_store(state.store_config) as store:
            if not yes and settings.confirm_delete:
                thought = store.get_thought(thought_id)
                if thought is None or thought.is_deleted:
                    console.print(
                        f"[yellow]Thought #{thought_id} not found or already deleted[/yellow]"
                    )
                    return
                if not typer.confirm(
                    f"Delete thought #{thought_id} ({thought.text})?",
                    default=False,
                ):
                    console.print("Deletion canceled.")
                    return

            deleted = store.soft_delete(thought_id)
    except JotError as e:
        _fail(e, state)

    if deleted:
        console.print(f"Deleted [cyan]#{thought_id}[/cyan]")
    else:
        console.print(
            f"[yellow]Thought #{thought_id} not found or already deleted[/yellow]"
        )


@app.command()
def where(ctx: typer.Context) -> None:
    """
    Show the path of the thought database.

    Example:
        $ JOT_DATA_DIR=/tmp/jot jot where
    """
    state: CliState = ctx.obj
    store_config = state.store_config
    try:
        db_path = resolve_db_path(
            store_config.app_name,
            override_dir=store_config.data_dir,
            file_name=store_config.db_file_name,
        )
    except JotError as e:
        _fail(e, state)

    # Plain print so long paths are never wrapped
    print(db_path)


if __name__ == "__main__":
    app()
