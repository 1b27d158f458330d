"""Rich rendering of workspaces, dependency listings, conflicts and changes."""

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from monoalign_schema import WorkspaceKind
from monoalign_sdk import (
    ChangeAction,
    ChangeRecord,
    Conflict,
    DependencyIndex,
    InstallReport,
    WorkspaceSnapshot,
    sorted_index,
)

from .utils import console

KIND_ICONS = {
    WorkspaceKind.ROOT: "🏠",
    WorkspaceKind.APP: "📱",
    WorkspaceKind.PACKAGE: "📦",
}


def _plural(count: int, word: str = "workspace") -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def render_workspaces(snapshot: WorkspaceSnapshot) -> None:
    table = Table(title="Available Workspaces", show_header=True, header_style="bold cyan")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Path", style="dim")
    for workspace in snapshot:
        table.add_row(
            f"{KIND_ICONS[workspace.kind]} {workspace.kind.value}",
            escape(workspace.name),
            workspace.relative_path(snapshot.root),
        )
    console.print(table)


def render_package_list(index: DependencyIndex) -> None:
    """Every package, its versions and who uses them."""
    lines: List[str] = []
    for package_name, versions in sorted_index(index):
        lines.append(f"[bold cyan]{escape(package_name)}[/bold cyan]")
        for version, workspaces in versions.items():
            lines.append(f"  [yellow]{escape(version)}[/yellow] [dim]({_plural(len(workspaces))})[/dim]")
            lines.extend(f"    [dim]├─[/dim] {escape(w.name)}" for w in workspaces)
        lines.append("")
    console.print(Panel("\n".join(lines).rstrip() or "No dependencies declared", title="All Packages"))


def render_conflicts(conflicts: Sequence[Conflict]) -> None:
    count = len(conflicts)
    lines = [f"[red]Found {_plural(count, 'package')} with version conflicts:[/red]", ""]
    for conflict in conflicts:
        lines.append(f"[bold yellow]📦 {escape(conflict.package_name)}[/bold yellow]")
        for version, workspaces in conflict.versions.items():
            lines.append(f"  [cyan]{escape(version)}[/cyan] [dim]({_plural(len(workspaces))})[/dim]")
            lines.extend(f"    [dim]├─[/dim] {escape(w.name)}" for w in workspaces)
        lines.append("")
    console.print(Panel("\n".join(lines).rstrip(), title="Version Conflicts Detected"))


def render_version_groups(package_name: str, usage: Dict[str, List[str]]) -> None:
    lines: List[str] = []
    for version, names in usage.items():
        lines.append(f"[yellow]Version {escape(version)}:[/yellow]")
        lines.extend(f"  [dim]├─[/dim] {escape(name)}" for name in names)
        lines.append("")
    console.print(Panel("\n".join(lines).rstrip(), title=escape(f'Current versions of "{package_name}"')))


def _describe(change: ChangeRecord) -> str:
    if change.action is ChangeAction.REMOVE:
        return f"🗑️  {escape(change.workspace)}: Removed from {change.bucket} [dim]({escape(str(change.before))})[/dim]"
    if change.action is ChangeAction.ADD:
        return f"➕ {escape(change.workspace)}: Added [green]{escape(str(change.after))}[/green] [dim]({change.bucket})[/dim]"
    return (
        f"🔄 {escape(change.workspace)}: [dim]{escape(str(change.before))}[/dim] → [green]{escape(str(change.after))}[/green] "
        f"[dim]({change.bucket})[/dim]"
    )


def render_changes(changes: Sequence[ChangeRecord], title: str) -> None:
    body = "\n".join(_describe(c) for c in changes) or "[dim]No changes[/dim]"
    console.print(Panel(body, title=escape(title)))


def render_install_report(report: InstallReport, root: Path) -> None:
    for directory in report.succeeded:
        console.print(f"[green]✅ Installed in {escape(_relative(directory, root))}[/green]")
    for directory, reason in report.failed.items():
        console.print(f"[red]❌ Install failed in {escape(_relative(directory, root))}: {escape(reason)}[/red]")


def render_manual_instructions(instructions: Sequence[Tuple[str, str]]) -> None:
    lines = ["[yellow]Run the following commands to install packages manually:[/yellow]", ""]
    for directory, command in instructions:
        lines.append(f"[cyan]📁 {'root' if directory == '.' else escape(directory)}:[/cyan]")
        lines.append(f"   [dim]cd {escape(directory)}[/dim]")
        lines.append(f"   [green]{escape(command)}[/green]")
        lines.append("")
    console.print(Panel("\n".join(lines).rstrip(), title="Manual Installation"))


def _relative(path: Path, root: Path) -> str:
    try:
        rel = str(Path(path).relative_to(root))
    except ValueError:
        return str(path)
    return "root" if rel == "." else rel
