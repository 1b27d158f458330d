"""
Workspace Models
================

Immutable records produced by the workspace scanner.

A Workspace carries a point-in-time snapshot of its manifest. The snapshot is
not refreshed after the manifest writer persists a change; anything that
mutates a manifest re-reads it from disk first.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from monoalign_schema import PackageManifest, WorkspaceKind


@dataclass(frozen=True)
class Workspace:
    """
    One package directory of the monorepo.

    Attributes:
        path: Absolute directory path (unique within a snapshot)
        name: Manifest name, or the directory name when absent
        kind: root, app or package
        manifest: Typed manifest snapshot taken during the scan
    """

    path: Path
    name: str
    kind: WorkspaceKind
    manifest: PackageManifest = field(compare=False, hash=False, repr=False)

    def declares(self, package_name: str) -> bool:
        """Whether any dependency bucket declares the package."""
        return self.manifest.find_bucket(package_name) is not None

    def relative_path(self, root: Path) -> str:
        """Path relative to the monorepo root ('.' for the root itself)."""
        try:
            rel = self.path.relative_to(root)
        except ValueError:
            return str(self.path)
        return str(rel) if str(rel) != "." else "."


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """
    The ordered workspace inventory of one run.

    Order is root first, then apps, then packages, each in directory order.
    """

    root: Path
    workspaces: Tuple[Workspace, ...] = ()

    def __iter__(self) -> Iterator[Workspace]:
        return iter(self.workspaces)

    def __len__(self) -> int:
        return len(self.workspaces)

    def __bool__(self) -> bool:
        return bool(self.workspaces)

    @property
    def root_workspace(self) -> Optional[Workspace]:
        for workspace in self.workspaces:
            if workspace.kind is WorkspaceKind.ROOT:
                return workspace
        return None

    def paths(self) -> List[Path]:
        return [w.path for w in self.workspaces]

    def find(self, path: Union[str, Path]) -> Optional[Workspace]:
        """Find a workspace by directory path."""
        target = Path(path).resolve()
        for workspace in self.workspaces:
            if workspace.path == target:
                return workspace
        return None

    def find_by_name(self, name: str) -> Optional[Workspace]:
        for workspace in self.workspaces:
            if workspace.name == name:
                return workspace
        return None

    def by_kind(self, kinds: Iterable[Union[WorkspaceKind, str]]) -> List[Workspace]:
        """Workspaces whose kind is in ``kinds``, in scan order."""
        wanted = {WorkspaceKind(k) for k in kinds}
        return [w for w in self.workspaces if w.kind in wanted]
