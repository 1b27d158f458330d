"""
Conflict Detection
==================

A conflict is a package declared at two or more distinct version strings
across the monorepo. Version strings are compared literally; no range
arithmetic is done.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..results import unique_paths
from .index import DependencyIndex, VersionMap, package_sort_key


@dataclass(frozen=True)
class Conflict:
    """One conflicted package and its version groups."""

    package_name: str
    versions: VersionMap

    @property
    def version_count(self) -> int:
        return len(self.versions)

    @property
    def workspace_count(self) -> int:
        return sum(len(workspaces) for workspaces in self.versions.values())

    def most_common_version(self) -> str:
        """
        Version used by the most workspaces.

        Ties go to the version encountered first in the version map.
        """
        best: Optional[str] = None
        best_count = 0
        for version, workspaces in self.versions.items():
            if len(workspaces) > best_count:
                best, best_count = version, len(workspaces)
        if best is None:
            raise ValueError(f"Conflict for '{self.package_name}' has no versions")
        return best

    def workspace_paths(self) -> List[Path]:
        """Every workspace path in the conflict, de-duplicated."""
        return unique_paths(w.path for group in self.versions.values() for w in group)


def find_conflicts(index: DependencyIndex) -> List[Conflict]:
    """
    Packages with more than one version in use, sorted by name.

    Pure function over the index.
    """
    conflicts = [
        Conflict(package_name=name, versions=versions)
        for name, versions in index.items()
        if len(versions) > 1
    ]
    conflicts.sort(key=lambda c: package_sort_key(c.package_name))
    return conflicts


def select_conflicts(conflicts: Iterable[Conflict], package_names: Iterable[str]) -> List[Conflict]:
    """Keep only conflicts for the given packages, preserving order."""
    wanted = set(package_names)
    return [c for c in conflicts if c.package_name in wanted]
