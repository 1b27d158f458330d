"""Menu command - Interactive top-level action picker."""

from typing import Callable, Dict

import typer

from monoalign_sdk import OperationResult

from .add_cmd import add_flow
from .conflicts_cmd import conflicts_flow
from .context import AppContext, get_app_context
from .install_cmd import install_flow
from .list_cmd import list_flow
from .release_cmd import release_flow
from .remove_cmd import remove_flow
from .sync_cmd import sync_flow
from .utils import console, run_flow

_ACTIONS = [
    ("add", "➕ Add/Update a package"),
    ("remove", "🗑️  Remove a package"),
    ("sync", "🔄 Sync package versions"),
    ("conflicts", "🔍 Find version conflicts"),
    ("list", "📋 List all packages"),
    ("install", "📦 Install packages"),
    ("release", "🚀 Create a release"),
    ("exit", "👋 Exit"),
]

_FLOWS: Dict[str, Callable[[AppContext], OperationResult]] = {
    "add": add_flow,
    "remove": remove_flow,
    "sync": sync_flow,
    "conflicts": conflicts_flow,
    "list": list_flow,
    "install": install_flow,
    "release": release_flow,
}


def menu_flow(app_ctx: AppContext) -> OperationResult:
    console.print("\n[bold cyan]📦 Monorepo Package Manager[/bold cyan]")
    action = app_ctx.prompter.select("What would you like to do?", _ACTIONS)
    if action == "exit":
        return OperationResult.noop("Goodbye!")
    return _FLOWS[action](app_ctx)


def menu(ctx: typer.Context):
    """
    Pick an action interactively (default when no command is given).

    Examples:
        monoalign
        monoalign menu
    """
    app_ctx = get_app_context(ctx)
    run_flow(lambda: menu_flow(app_ctx), app_ctx.verbose)
