"""Remove command - Drop a dependency from selected workspaces."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from monoalign_common import ValidationError
from monoalign_sdk import (
    OperationResult,
    OperationStatus,
    all_package_names,
    execute_removal,
    workspaces_declaring,
)

from .context import AppContext, get_app_context, offer_install, preview_and_apply
from .render import KIND_ICONS
from .utils import run_flow


def remove_flow(
    app_ctx: AppContext,
    package: Optional[str] = None,
    targets: Optional[List[Path]] = None,
    dry_run: Optional[bool] = None,
    install: Optional[bool] = None,
) -> OperationResult:
    snapshot = app_ctx.scan()
    names = all_package_names(snapshot)
    if not names:
        return OperationResult.noop("No packages found in any workspace")

    if package is None:
        package = app_ctx.prompter.select("Select package to remove:", [(n, escape(n)) for n in names])

    declaring = workspaces_declaring(snapshot, package)
    if not declaring:
        return OperationResult.noop(f'Package "{package}" not found in any workspace')

    if targets is None:
        targets = app_ctx.prompter.multiselect(
            f"Select workspaces to remove {escape(package)} from:",
            [
                (w.path, f"{KIND_ICONS[w.kind]} {escape(w.name)} [dim]({escape(w.manifest.all_dependencies()[package])})[/dim]")
                for w in declaring
            ],
        )
    if not targets:
        return OperationResult.noop("No workspaces selected")

    changes, preview = preview_and_apply(
        app_ctx,
        lambda dry: execute_removal(snapshot, package, targets, dry_run=dry),
        dry_run,
        "Removal",
    )
    if preview:
        return OperationResult(
            OperationStatus.NOOP, message="Preview only, nothing written", changes=changes, dry_run=True
        )
    if not changes:
        return OperationResult.noop(f'Package "{package}" not declared in the selected workspaces')

    affected = [c.path for c in changes]
    offer_install(app_ctx, affected, install, message="Update lockfiles now? (Recommended after removing packages)")
    return OperationResult(
        OperationStatus.SUCCESS,
        message=f"Removed {package} from {len(changes)} workspace(s)",
        changes=changes,
        affected_paths=affected,
    )


def remove(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(None, help="Package to remove (prompted when omitted)"),
    all_workspaces: bool = typer.Option(
        False, "--all", "-a", help="Remove from every workspace declaring it"
    ),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--apply", help="Preview only, or write without previewing"
    ),
    install: Optional[bool] = typer.Option(
        None, "--install/--no-install", help="Run the package manager afterwards"
    ),
):
    """
    Remove a package from selected workspaces.

    Examples:
        monoalign remove
        monoalign remove lodash --all --apply --no-install
    """
    app_ctx = get_app_context(ctx)

    def flow() -> OperationResult:
        targets = None
        if all_workspaces:
            if not package:
                raise ValidationError("--all requires a package name")
            targets = [w.path for w in workspaces_declaring(app_ctx.scan(), package)]
        return remove_flow(app_ctx, package, targets, dry_run, install)

    run_flow(flow, app_ctx.verbose)
