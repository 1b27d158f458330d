"""Add command - Add or update a dependency in selected workspaces."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from monoalign_common import LATEST_TAG, ValidationError
from monoalign_schema import DependencyBucket, WorkspaceKind
from monoalign_sdk import (
    OperationResult,
    OperationStatus,
    UpdateConfig,
    WorkspaceSnapshot,
    execute_update,
)

from .context import AppContext, get_app_context, offer_install, preview_and_apply
from .render import KIND_ICONS, render_workspaces
from .utils import info, run_flow

_BUCKET_OPTIONS = [
    (DependencyBucket.DEV_DEPENDENCIES, "🔧 devDependencies"),
    (DependencyBucket.DEPENDENCIES, "📦 dependencies"),
    (DependencyBucket.PEER_DEPENDENCIES, "🤝 peerDependencies"),
]


class Scope(str, Enum):
    ALL = "all"
    BY_KIND = "kind"
    CUSTOM = "custom"


def select_workspaces(app_ctx: AppContext, snapshot: WorkspaceSnapshot) -> List[Path]:
    """Ask for the update scope: everything, by kind, or hand-picked."""
    scope = app_ctx.prompter.select(
        "Select update scope:",
        [
            (Scope.ALL, "🌍 All workspaces"),
            (Scope.BY_KIND, "🗂️  By workspace type (apps/packages)"),
            (Scope.CUSTOM, "✋ Custom selection"),
        ],
    )
    if scope is Scope.ALL:
        return snapshot.paths()
    if scope is Scope.BY_KIND:
        kinds = app_ctx.prompter.multiselect(
            "Select workspace types:",
            [
                (WorkspaceKind.ROOT, "🏠 Root workspace"),
                (WorkspaceKind.APP, "📱 Apps"),
                (WorkspaceKind.PACKAGE, "📦 Packages"),
            ],
        )
        return [w.path for w in snapshot.by_kind(kinds)]
    return app_ctx.prompter.multiselect(
        "Select specific workspaces:",
        [
            (w.path, f"{KIND_ICONS[w.kind]} {escape(w.name)} [dim]({escape(w.relative_path(snapshot.root))})[/dim]")
            for w in snapshot
        ],
    )


def _resolve_targets(
    snapshot: WorkspaceSnapshot,
    all_workspaces: bool,
    kinds: Optional[List[WorkspaceKind]],
    workspace: Optional[List[str]],
) -> Optional[List[Path]]:
    if all_workspaces:
        return snapshot.paths()
    targets: List[Path] = []
    if kinds:
        targets.extend(w.path for w in snapshot.by_kind(kinds))
    for name_or_path in workspace or []:
        found = snapshot.find_by_name(name_or_path) or snapshot.find(snapshot.root / name_or_path)
        if found is None:
            raise ValidationError(f"Unknown workspace: {name_or_path}")
        if found.path not in targets:
            targets.append(found.path)
    return targets or None


def add_flow(
    app_ctx: AppContext,
    package: Optional[str] = None,
    version: Optional[str] = None,
    bucket: Optional[DependencyBucket] = None,
    targets: Optional[List[Path]] = None,
    dry_run: Optional[bool] = None,
    install: Optional[bool] = None,
    snapshot: Optional[WorkspaceSnapshot] = None,
) -> OperationResult:
    snapshot = snapshot or app_ctx.scan()
    if not snapshot:
        return OperationResult.noop("No workspaces found")
    render_workspaces(snapshot)

    package = package or app_ctx.prompter.text("Enter package name (e.g. typescript, react, lodash)")
    if version is None:
        latest = app_ctx.registry.latest_version(package)
        if latest:
            info(f"Latest version on npm: {latest}")
        version = app_ctx.prompter.text("Enter package version", default=latest or LATEST_TAG)
    bucket = bucket or app_ctx.prompter.select("Select dependency type:", _BUCKET_OPTIONS)
    if targets is None:
        targets = select_workspaces(app_ctx, snapshot)
    if not targets:
        return OperationResult.noop("No workspaces selected")

    config = UpdateConfig(package_name=package, version=version, bucket=bucket, target_workspaces=targets)

    def run(dry: bool):
        config.dry_run = dry
        return execute_update(snapshot, config)

    changes, preview = preview_and_apply(app_ctx, run, dry_run, "Changes")
    if preview:
        return OperationResult(
            OperationStatus.NOOP, message="Preview only, nothing written", changes=changes, dry_run=True
        )

    offer_install(app_ctx, targets, install)
    return OperationResult(
        OperationStatus.SUCCESS,
        message="Package update completed successfully!",
        changes=changes,
        affected_paths=targets,
    )


def add(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(None, help="Package name (prompted when omitted)"),
    version: Optional[str] = typer.Option(None, "--version", "-V", help="Version spec to write"),
    bucket: Optional[DependencyBucket] = typer.Option(
        None, "--type", "-t", help="Dependency bucket"
    ),
    all_workspaces: bool = typer.Option(False, "--all", "-a", help="Target every workspace"),
    kind: Optional[List[WorkspaceKind]] = typer.Option(
        None, "--kind", "-k", help="Target workspaces of this kind (repeatable)"
    ),
    workspace: Optional[List[str]] = typer.Option(
        None, "--workspace", "-w", help="Target workspace by name or relative path (repeatable)"
    ),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--apply", help="Preview only, or write without previewing"
    ),
    install: Optional[bool] = typer.Option(
        None, "--install/--no-install", help="Run the package manager afterwards"
    ),
):
    """
    Add or update a package in selected workspaces.

    Examples:
        monoalign add lodash
        monoalign add typescript --version ^5.6.0 --type devDependencies --all --apply
        monoalign add react -V ^19.0.0 -k app --dry-run
    """
    app_ctx = get_app_context(ctx)

    def flow() -> OperationResult:
        snapshot = app_ctx.scan()
        targets = _resolve_targets(snapshot, all_workspaces, kind, workspace)
        return add_flow(app_ctx, package, version, bucket, targets, dry_run, install, snapshot=snapshot)

    run_flow(flow, app_ctx.verbose)
