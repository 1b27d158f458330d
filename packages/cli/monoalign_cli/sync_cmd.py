"""Sync command - Bring one package to a single version across workspaces."""

from typing import Optional

import typer
from rich.markup import escape

from monoalign_sdk import (
    OperationResult,
    OperationStatus,
    collect_sync_versions,
    sync_to_version,
)

from .context import AppContext, get_app_context, offer_install, preview_and_apply
from .render import render_version_groups
from .utils import run_flow


def _plural(count: int) -> str:
    return f"{count} workspace{'s' if count != 1 else ''}"


def sync_flow(
    app_ctx: AppContext,
    package: Optional[str] = None,
    to: Optional[str] = None,
    dry_run: Optional[bool] = None,
    install: Optional[bool] = None,
) -> OperationResult:
    snapshot = app_ctx.scan()
    package = package or app_ctx.prompter.text("Enter package name to sync (e.g. typescript, react)")

    versions = collect_sync_versions(snapshot, package)
    if not versions:
        return OperationResult.noop(f'Package "{package}" not found in any workspace')
    if len(versions) == 1:
        return OperationResult.noop(
            f'Package "{package}" already has consistent version: {next(iter(versions))}'
        )

    render_version_groups(package, {v: [w.name for w in ws] for v, ws in versions.items()})
    target = to or app_ctx.prompter.select(
        "Select version to sync to:",
        [(v, f"{escape(v)} (used in {_plural(len(ws))})") for v, ws in versions.items()],
    )

    changes, preview = preview_and_apply(
        app_ctx,
        lambda dry: sync_to_version(package, target, versions, dry_run=dry),
        dry_run,
        "Sync",
    )
    if preview:
        return OperationResult(
            OperationStatus.NOOP, message="Preview only, nothing written", changes=changes, dry_run=True
        )

    affected = [w.path for group in versions.values() for w in group]
    offer_install(app_ctx, affected, install, message="Install packages now? (Recommended after version changes)")
    return OperationResult(
        OperationStatus.SUCCESS,
        message="✨ Version sync completed successfully!",
        changes=changes,
        affected_paths=affected,
    )


def sync(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(None, help="Package to sync (prompted when omitted)"),
    to: Optional[str] = typer.Option(None, "--to", "-t", help="Target version"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--apply", help="Preview only, or write without previewing"
    ),
    install: Optional[bool] = typer.Option(
        None, "--install/--no-install", help="Run the package manager afterwards"
    ),
):
    """
    Sync one package to a single version across all workspaces.

    Examples:
        monoalign sync react
        monoalign sync typescript --to ^5.6.0 --apply --no-install
    """
    app_ctx = get_app_context(ctx)
    run_flow(lambda: sync_flow(app_ctx, package, to, dry_run, install), app_ctx.verbose)
