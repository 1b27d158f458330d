"""Install command - Run the package manager for the monorepo."""

from typing import Optional

import typer

from monoalign_sdk import OperationResult, OperationStatus, detect_package_manager

from .context import AppContext, get_app_context, offer_install
from .render import render_workspaces
from .utils import info, run_flow


def install_flow(app_ctx: AppContext, yes: Optional[bool] = None) -> OperationResult:
    snapshot = app_ctx.scan()
    if not snapshot:
        return OperationResult.noop("No workspaces found")

    render_workspaces(snapshot)
    info(f"Package manager: {detect_package_manager(app_ctx.root)}")
    report = offer_install(
        app_ctx,
        snapshot.paths(),
        True if yes else None,
        message="Install packages for all workspaces?",
    )
    if report is None:
        return OperationResult.noop("Install skipped")
    if not report.ok:
        return OperationResult(
            OperationStatus.ERROR,
            message=f"Install failed in {len(report.failed)} director{'y' if len(report.failed) == 1 else 'ies'}",
            affected_paths=snapshot.paths(),
        )
    return OperationResult(
        OperationStatus.SUCCESS, message="Packages installed", affected_paths=snapshot.paths()
    )


def install(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Install packages for every workspace.

    Uses the package manager detected from the root lockfile
    (pnpm, yarn, bun, falling back to npm).

    Examples:
        monoalign install
        monoalign install --yes
    """
    app_ctx = get_app_context(ctx)
    run_flow(lambda: install_flow(app_ctx, yes), app_ctx.verbose)
