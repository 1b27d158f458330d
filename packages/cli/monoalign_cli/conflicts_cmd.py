"""Conflicts command - Find packages used at several versions and resolve them."""

from enum import Enum
from typing import List, Optional

import typer
from rich.markup import escape

from monoalign_sdk import (
    OperationResult,
    OperationStatus,
    ResolutionAborted,
    ResolutionEngine,
    ResolutionStrategy,
    build_dependency_index,
    find_conflicts,
    select_conflicts,
)

from .context import AppContext, get_app_context, offer_install
from .render import render_changes, render_conflicts
from .utils import run_flow, success


class StrategyOption(str, Enum):
    """Strategies offered on the command line."""

    INTERACTIVE = "interactive"
    BULK = "bulk"
    MOST_COMMON = "most-common"
    LATEST = "latest"
    SPECIFIC = "specific"


_ALL_CONFLICTS_OPTIONS = [
    (ResolutionStrategy.BULK_CHOICE, "🎯 Choose a version in use for each package (bulk)"),
    (ResolutionStrategy.LATEST, "🚀 Use latest version from npm for all"),
    (ResolutionStrategy.INTERACTIVE, "🛠️  Resolve each conflict interactively"),
]

_TOP_LEVEL_OPTIONS = [
    ("all", "🔄 Resolve all conflicts"),
    (StrategyOption.SPECIFIC, "🎯 Choose specific packages to resolve"),
    (StrategyOption.MOST_COMMON, "⚡ Auto-resolve to most common versions"),
    (StrategyOption.LATEST, "🚀 Auto-resolve all to latest versions"),
]


def _pick_strategy(app_ctx: AppContext) -> StrategyOption:
    picked = app_ctx.prompter.select("How would you like to resolve conflicts?", _TOP_LEVEL_OPTIONS)
    if picked != "all":
        return StrategyOption(picked)
    bulk = app_ctx.prompter.select(
        "How would you like to resolve all conflicts?", _ALL_CONFLICTS_OPTIONS, default=3
    )
    return StrategyOption(ResolutionStrategy(bulk).value)


def conflicts_flow(
    app_ctx: AppContext,
    strategy: Optional[StrategyOption] = None,
    packages: Optional[List[str]] = None,
    check: bool = False,
    install: Optional[bool] = None,
) -> OperationResult:
    snapshot = app_ctx.scan()
    conflicts = find_conflicts(build_dependency_index(snapshot))
    if packages:
        conflicts = select_conflicts(conflicts, packages)

    if not conflicts:
        return OperationResult.noop(
            "🎉 No version conflicts found! All packages have consistent versions across workspaces."
        )

    render_conflicts(conflicts)
    if check:
        return OperationResult(
            OperationStatus.ERROR,
            message=f"{len(conflicts)} package(s) with version conflicts",
        )

    strategy = strategy or _pick_strategy(app_ctx)
    if strategy is StrategyOption.SPECIFIC:
        names = app_ctx.prompter.multiselect(
            "Select packages to resolve:",
            [(c.package_name, f"📦 {escape(c.package_name)} [dim]({c.version_count} versions)[/dim]") for c in conflicts],
        )
        conflicts = select_conflicts(conflicts, names)
        strategy = StrategyOption.INTERACTIVE

    engine = ResolutionEngine(prompter=app_ctx.prompter, registry=app_ctx.registry)
    try:
        outcome = engine.resolve(conflicts, ResolutionStrategy(strategy.value))
    except ResolutionAborted as e:
        render_changes(e.outcome.changes, "Applied Before Failure")
        return OperationResult(
            OperationStatus.ERROR,
            message=e.message,
            changes=e.outcome.changes,
            affected_paths=e.outcome.affected_paths,
        )

    render_changes(outcome.changes, "Applied Sync")
    if outcome.resolved:
        success(f"Resolved {len(outcome.resolved)} of {len(conflicts)} conflicts")
    offer_install(
        app_ctx,
        outcome.affected_paths,
        install,
        message="Install packages now? (Recommended after resolving conflicts)",
    )
    return OperationResult(
        OperationStatus.SUCCESS if outcome.resolved else OperationStatus.NOOP,
        message="✨ Conflict resolution completed" if outcome.resolved else "No conflicts were resolved",
        changes=outcome.changes,
        affected_paths=outcome.affected_paths,
    )


def conflicts(
    ctx: typer.Context,
    strategy: Optional[StrategyOption] = typer.Option(
        None, "--strategy", "-s", help="Resolution strategy (prompted when omitted)"
    ),
    package: Optional[List[str]] = typer.Option(
        None, "--package", "-p", help="Only consider these packages (repeatable)"
    ),
    check: bool = typer.Option(
        False, "--check", help="Report conflicts and exit 1 if any, without resolving"
    ),
    install: Optional[bool] = typer.Option(
        None, "--install/--no-install", help="Run the package manager afterwards"
    ),
):
    """
    Find and resolve version conflicts across workspaces.

    Examples:
        monoalign conflicts
        monoalign conflicts --check
        monoalign conflicts --strategy most-common --no-install
        monoalign conflicts -s interactive -p react -p typescript
    """
    app_ctx = get_app_context(ctx)
    run_flow(
        lambda: conflicts_flow(app_ctx, strategy=strategy, packages=package, check=check, install=install),
        app_ctx.verbose,
    )
