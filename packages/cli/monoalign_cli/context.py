"""Per-invocation state shared by every command."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import typer

from monoalign_common import MonoalignSettings
from monoalign_sdk import (
    ChangeRecord,
    InstallReport,
    RegistryClient,
    SubprocessInstaller,
    WorkspaceSnapshot,
    manual_install_instructions,
    scan_workspaces,
)

from .prompts import RichPrompter
from .render import render_changes, render_install_report, render_manual_instructions
from .utils import console, info, warning


@dataclass
class AppContext:
    """
    Everything a flow needs: where the monorepo is, settings, and the
    capabilities (prompter, registry, installer) it talks to.
    """

    root: Path
    settings: MonoalignSettings
    verbose: bool = False
    prompter: RichPrompter = field(default_factory=RichPrompter)
    registry: Optional[RegistryClient] = None
    installer: Optional[SubprocessInstaller] = None

    def __post_init__(self):
        self.root = Path(self.root).resolve()
        if self.registry is None:
            self.registry = RegistryClient(
                timeout=self.settings.registry_timeout,
                enabled=self.settings.registry_enabled,
            )
        if self.installer is None:
            self.installer = SubprocessInstaller(self.root, timeout=self.settings.install_timeout)

    def scan(self) -> WorkspaceSnapshot:
        with console.status("[bold green]Scanning workspace for package.json files..."):
            snapshot = scan_workspaces(self.root, self.settings.workspace_dirs)
        info(f"Found {len(snapshot)} workspaces")
        return snapshot


def get_app_context(ctx: typer.Context) -> AppContext:
    """AppContext stored by the main callback."""
    app_ctx = ctx.find_object(AppContext)
    if app_ctx is None:
        raise RuntimeError("monoalign context not initialised")
    return app_ctx


def preview_and_apply(
    app_ctx: AppContext,
    operation: Callable[[bool], List[ChangeRecord]],
    dry_run: Optional[bool],
    title: str,
) -> Tuple[List[ChangeRecord], bool]:
    """
    Run an operation as preview, commit, or preview-then-confirm.

    ``dry_run`` None asks whether to preview first; after a preview the user
    may apply the identical plan. True previews only, False commits directly.

    Returns:
        (change records, whether the result is only a preview)
    """
    ask_to_apply = dry_run is None
    if dry_run is None:
        dry_run = app_ctx.prompter.confirm(
            "Run in dry-run mode? (Preview changes without applying)",
            default=app_ctx.settings.default_dry_run,
        )

    if not dry_run:
        changes = operation(False)
        render_changes(changes, f"Applied {title}")
        return changes, False

    changes = operation(True)
    render_changes(changes, f"Preview {title}")
    if changes and ask_to_apply and app_ctx.prompter.confirm("Apply these changes?", default=False):
        changes = operation(False)
        render_changes(changes, f"Applied {title}")
        return changes, False
    return changes, True


def offer_install(
    app_ctx: AppContext,
    paths: Sequence[Path],
    install: Optional[bool],
    message: str = "Install packages now? (Recommended after package changes)",
) -> Optional[InstallReport]:
    """Run the install step for ``paths`` when asked or confirmed."""
    if not paths:
        return None
    if install is None:
        install = app_ctx.prompter.confirm(message, default=True)
    if not install:
        return None

    with console.status("[bold green]📦 Installing packages..."):
        report = app_ctx.installer(paths)
    render_install_report(report, app_ctx.root)
    if not report.ok:
        warning("Some installs failed")
        render_manual_instructions(manual_install_instructions(paths, app_ctx.root, report.manager))
    return report
