"""monoalign CLI - Main entry point."""
from pathlib import Path

import typer

from monoalign_common import ConfigError, ExitCodes, configure_logging, load_settings, set_run_id

from . import (
    add_cmd,
    conflicts_cmd,
    install_cmd,
    list_cmd,
    menu_cmd,
    release_cmd,
    remove_cmd,
    sync_cmd,
)
from .context import AppContext
from .utils import error

app = typer.Typer(
    name="monoalign",
    help="monoalign - Keep dependency versions aligned across a JavaScript monorepo",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def callback(
    ctx: typer.Context,
    root: Path = typer.Option(
        Path("."), "--root", "-r", help="Monorepo root (directory holding the root package.json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and tracebacks"),
):
    """Load settings and logging, then hand the context to the command."""
    try:
        settings = load_settings(root)
    except ConfigError as e:
        error(e.message)
        raise typer.Exit(ExitCodes.ERROR)

    configure_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)
    set_run_id()
    ctx.obj = AppContext(root=root, settings=settings, verbose=verbose)

    if ctx.invoked_subcommand is None:
        menu_cmd.menu(ctx)


# Register all commands
app.command()(add_cmd.add)
app.command()(remove_cmd.remove)
app.command()(sync_cmd.sync)
app.command()(conflicts_cmd.conflicts)
app.command(name="list")(list_cmd.list_packages)
app.command()(install_cmd.install)
app.command()(release_cmd.release)
app.command()(menu_cmd.menu)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
