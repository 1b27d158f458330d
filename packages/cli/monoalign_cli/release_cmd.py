"""Release command - Bump versions, update the changelog, commit and tag."""

from typing import List, Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from monoalign_common import ValidationError
from monoalign_schema import BumpKind, ReleaseRequest
from monoalign_sdk import (
    OperationResult,
    OperationStatus,
    WorkspaceSnapshot,
    bump_version,
    current_release_version,
    run_release,
)

from .context import AppContext, get_app_context
from .render import render_changes
from .utils import info, run_flow

_BUMP_OPTIONS = [
    (BumpKind.PATCH, "🩹 patch"),
    (BumpKind.MINOR, "✨ minor"),
    (BumpKind.MAJOR, "💥 major"),
    (BumpKind.PRERELEASE, "🧪 prerelease"),
]


def _build_request(version: str, notes: str, push: bool, dry_run: bool) -> ReleaseRequest:
    try:
        return ReleaseRequest(version=version, notes=notes, push=push, dry_run=dry_run)
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e


def _collect_notes(app_ctx: AppContext) -> str:
    """Read release notes line by line until an empty line."""
    info("Enter release notes, one line at a time (empty line to finish)")
    lines: List[str] = []
    while True:
        line = app_ctx.prompter.text("Notes", required=False)
        if not line:
            return "\n".join(lines)
        lines.append(line)


def _next_version(
    app_ctx: AppContext, current: str, bump: Optional[BumpKind], version: Optional[str]
) -> str:
    if version:
        return version
    if bump is None:
        bump = app_ctx.prompter.select(
            f"Select release type (current version {current}):",
            [(kind, f"{label} → {bump_version(current, kind)}") for kind, label in _BUMP_OPTIONS],
        )
    return bump_version(current, bump)


def release_flow(
    app_ctx: AppContext,
    bump: Optional[BumpKind] = None,
    version: Optional[str] = None,
    notes: Optional[str] = None,
    push: Optional[bool] = None,
    dry_run: Optional[bool] = None,
    snapshot: Optional[WorkspaceSnapshot] = None,
) -> OperationResult:
    snapshot = snapshot or app_ctx.scan()
    current = current_release_version(snapshot)
    info(f"Current version: {current}")

    target = _next_version(app_ctx, current, bump, version)
    if notes is None:
        notes = _collect_notes(app_ctx)

    ask_to_apply = dry_run is None
    if dry_run is None:
        dry_run = app_ctx.prompter.confirm("Run in dry-run mode? (Preview release without writing)", default=True)

    plan = run_release(snapshot, _build_request(target, notes, push=False, dry_run=True))
    render_changes(plan.changes, f"Preview Release {plan.request.tag}")
    if dry_run and not (ask_to_apply and app_ctx.prompter.confirm(f"Create release {plan.request.tag}?", default=False)):
        return OperationResult(
            OperationStatus.NOOP, message="Preview only, nothing written", changes=plan.changes, dry_run=True
        )

    if push is None:
        push = app_ctx.prompter.confirm("Push commit and tag to the remote?", default=False)
    outcome = run_release(snapshot, _build_request(target, notes, push=push, dry_run=False))
    info(f"Completed steps: {', '.join(outcome.completed_steps)}")
    return OperationResult(
        OperationStatus.SUCCESS,
        message=f"🚀 Released {outcome.request.tag} (was {outcome.previous_version})",
        changes=outcome.changes,
        affected_paths=[c.path for c in outcome.changes],
    )


def release(
    ctx: typer.Context,
    bump: Optional[BumpKind] = typer.Option(None, "--bump", "-b", help="Version bump kind"),
    version: Optional[str] = typer.Option(
        None, "--version", "-V", help="Explicit release version (X.Y.Z[-pre])"
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Release notes"),
    push: Optional[bool] = typer.Option(None, "--push/--no-push", help="Push commit and tag"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--apply", help="Preview only, or release without previewing"
    ),
):
    """
    Cut a release: bump manifest versions, prepend the changelog, commit and tag.

    Examples:
        monoalign release --bump minor --notes "New sync command" --dry-run
        monoalign release --version 2.0.0 --apply --push
    """
    app_ctx = get_app_context(ctx)
    if bump and version:
        raise typer.BadParameter("Use either --bump or --version, not both")
    run_flow(lambda: release_flow(app_ctx, bump, version, notes, push, dry_run), app_ctx.verbose)
