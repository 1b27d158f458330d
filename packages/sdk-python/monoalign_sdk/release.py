"""
Release Flow
============

Cuts a release of the whole monorepo in one linear sequence:

1. Rewrite the ``version`` field of every manifest that has one (the root
   manifest always gets one)
2. Prepend the release notes to CHANGELOG.md
3. ``git add -A``, commit, annotated tag, and optionally push with tags

A failing git step raises ReleaseError; earlier steps are not undone.
"""

import subprocess
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from monoalign_common import CHANGELOG_FILENAME, ReleaseError, Timeouts, get_logger
from monoalign_schema import ReleaseRequest, WorkspaceKind

from .manifest import manifest_path, read_manifest, write_manifest
from .results import ChangeAction, ChangeRecord
from .workspace import WorkspaceSnapshot

logger = get_logger(__name__)

DEFAULT_START_VERSION = "0.0.0"
CHANGELOG_HEADER = "# Changelog\n"


def current_release_version(snapshot: WorkspaceSnapshot) -> str:
    """Version of the root manifest, or 0.0.0 when it has none."""
    root = snapshot.root_workspace
    if root is not None and root.manifest.version:
        return root.manifest.version
    return DEFAULT_START_VERSION


def apply_version_bump(snapshot: WorkspaceSnapshot, version: str, dry_run: bool) -> List[ChangeRecord]:
    """
    Set ``version`` in every versioned manifest.

    Workspaces whose manifest has no version field are left alone, except
    the root which always receives one.
    """
    changes: List[ChangeRecord] = []
    for workspace in snapshot:
        path = manifest_path(workspace.path)
        data = read_manifest(path)
        current = data.get("version")
        if current is None and workspace.kind is not WorkspaceKind.ROOT:
            continue
        if current == version:
            continue

        changes.append(
            ChangeRecord(
                workspace=workspace.name,
                path=workspace.path,
                bucket="version",
                before=current,
                after=version,
                action=ChangeAction.ADD if current is None else ChangeAction.UPDATE,
            )
        )
        if not dry_run:
            data["version"] = version
            write_manifest(path, data)
    return changes


def prepend_changelog(root: Path, section: str) -> Path:
    """Insert a release section right below the changelog title."""
    path = Path(root) / CHANGELOG_FILENAME
    existing = path.read_text(encoding="utf-8") if path.exists() else CHANGELOG_HEADER

    if existing.startswith(CHANGELOG_HEADER):
        body = existing[len(CHANGELOG_HEADER):].lstrip("\n")
        content = f"{CHANGELOG_HEADER}\n{section}"
        if body:
            content += f"\n{body}"
    else:
        content = f"{CHANGELOG_HEADER}\n{section}\n{existing}"

    path.write_text(content, encoding="utf-8")
    return path


class GitClient:
    """Runs git commands in the repository root."""

    def __init__(
        self,
        cwd: Path,
        timeout: float = Timeouts.GIT,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        self.cwd = Path(cwd)
        self.timeout = timeout
        self._runner = runner or subprocess.run

    def run(self, step: str, args: Sequence[str]) -> str:
        """
        Run one git command.

        Raises:
            ReleaseError: On missing git, timeout or non-zero exit
        """
        command = ["git", *args]
        logger.debug("Running git", step=step, command=" ".join(command))
        try:
            result = self._runner(
                command, cwd=str(self.cwd), capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ReleaseError(step, f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise ReleaseError(step, str(e)) from e

        if result.returncode != 0:
            raise ReleaseError(step, (result.stderr or "").strip() or f"exit code {result.returncode}")
        return (result.stdout or "").strip()

    def add_all(self) -> None:
        self.run("add", ["add", "-A"])

    def commit(self, message: str) -> None:
        self.run("commit", ["commit", "-m", message])

    def tag(self, name: str, message: str) -> None:
        self.run("tag", ["tag", "-a", name, "-m", message])

    def push(self) -> None:
        self.run("push", ["push", "--follow-tags"])


@dataclass
class ReleaseOutcome:
    """What the release flow did."""

    request: ReleaseRequest
    previous_version: str
    changes: List[ChangeRecord] = field(default_factory=list)
    changelog: Optional[Path] = None
    completed_steps: List[str] = field(default_factory=list)


def run_release(
    snapshot: WorkspaceSnapshot,
    request: ReleaseRequest,
    git: Optional[GitClient] = None,
    today: Optional[date] = None,
) -> ReleaseOutcome:
    """
    Execute (or preview) a release.

    Args:
        snapshot: Workspace inventory
        request: Validated release request
        git: Git client (defaults to one rooted at the snapshot root)
        today: Changelog date override

    Returns:
        The planned (dry run) or applied outcome
    """
    previous = current_release_version(snapshot)
    outcome = ReleaseOutcome(request=request, previous_version=previous)
    outcome.changes = apply_version_bump(snapshot, request.version, dry_run=request.dry_run)
    if request.dry_run:
        return outcome
    outcome.completed_steps.append("manifests")

    section = request.changelog_section((today or date.today()).isoformat(), previous=previous)
    outcome.changelog = prepend_changelog(snapshot.root, section)
    outcome.completed_steps.append("changelog")

    git = git or GitClient(snapshot.root)
    git.add_all()
    git.commit(request.commit_message)
    outcome.completed_steps.append("commit")
    git.tag(request.tag, request.tag_message())
    outcome.completed_steps.append("tag")
    if request.push:
        git.push()
        outcome.completed_steps.append("push")

    logger.info("Release created", version=request.version, tag=request.tag, pushed=request.push)
    return outcome
