"""List command - Show every dependency, its versions and the workspaces using them."""

import typer

from monoalign_sdk import OperationResult, OperationStatus, build_dependency_index

from .context import AppContext, get_app_context
from .render import render_package_list, render_workspaces
from .utils import run_flow


def list_flow(app_ctx: AppContext, show_workspaces: bool = False) -> OperationResult:
    snapshot = app_ctx.scan()
    if not snapshot:
        return OperationResult.noop("No workspaces found")
    if show_workspaces:
        render_workspaces(snapshot)
    index = build_dependency_index(snapshot)
    render_package_list(index)
    return OperationResult(OperationStatus.NOOP, message=f"{len(index)} packages in use")


def list_packages(
    ctx: typer.Context,
    workspaces: bool = typer.Option(
        False, "--workspaces", "-w", help="Also show the workspace inventory"
    ),
):
    """
    List all packages across workspaces.

    Examples:
        monoalign list
        monoalign list --workspaces
    """
    app_ctx = get_app_context(ctx)
    run_flow(lambda: list_flow(app_ctx, show_workspaces=workspaces), app_ctx.verbose)
