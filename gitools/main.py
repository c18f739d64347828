#!/usr/bin/env python3
"""
Main CLI entry point for gitools
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gitools import __version__
from gitools.config.keymap import get_config_path, load_keymap_config, write_example_config
from gitools.exceptions import GitoolsError
from gitools.palette.keymap import key_label

console = Console()

app = typer.Typer(
    name="gitools",
    help="Keyboard-driven git client with a two-level command palette.",
    no_args_is_help=True,
)

KeymapOption = typer.Option(
    None, "--keymap", "-k", envvar="GITOOLS_KEYMAP", help="Keymap YAML file"
)


def _fail(error: GitoolsError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


@app.command("open")
def open_repo(
    repo_path: Path = typer.Argument(Path("."), help="Repository to open"),
    keymap: Optional[Path] = KeymapOption,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Open the TUI on a repository."""
    # Textual is only needed here
    from gitools.ui.app import GitoolsApp, build_engine
    from gitools.utils.git_ops import GitRepository
    from gitools.utils.logging_utils import setup_logging

    log_file = setup_logging(verbose=verbose)

    try:
        config = load_keymap_config(keymap)
        repo = GitRepository.open(repo_path)
    except GitoolsError as e:
        _fail(e)

    if verbose:
        console.print(f"[dim]Logging to {log_file}[/dim]")

    GitoolsApp(build_engine(repo, config), repo=repo).run()


@app.command("keys")
def show_keys(keymap: Optional[Path] = KeymapOption):
    """Show the keymap as a table."""
    try:
        config = load_keymap_config(keymap)
    except GitoolsError as e:
        _fail(e)

    table = Table(title="Keymap")
    table.add_column("Keys", style="cyan")
    table.add_column("Group", style="blue")
    table.add_column("Action", style="green")
    table.add_column("Command")

    for node, leaf in config.keymap.leaves():
        table.add_row(
            f"space {key_label(node.key)} {key_label(leaf.key)}",
            node.name,
            leaf.name,
            leaf.command.value,
        )

    console.print(table)
    console.print(f"[dim]Precedence: {config.precedence.value}[/dim]")


@app.command("init-config")
def init_config(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write the keymap"),
):
    """Write the example keymap file."""
    target = path or get_config_path()
    if write_example_config(target):
        console.print(f"[green]Created[/green] {target}")
    else:
        console.print(f"[yellow]Already exists:[/yellow] {target}")


@app.command()
def version():
    """Show gitools version"""
    typer.echo(f"gitools version {__version__}")


def run():
    app()


if __name__ == "__main__":
    run()
