"""
Dependency Index
================

Aggregates, across all workspaces, which version strings of each package are
in use and by whom:

    {package_name: {version_spec: [workspace, ...]}}

Inner mappings keep insertion order (first workspace to declare a version
comes first), and workspace lists keep scan order.
"""

from typing import Dict, Iterable, List, Tuple

from ..workspace import Workspace

VersionMap = Dict[str, List[Workspace]]
DependencyIndex = Dict[str, VersionMap]


def package_sort_key(name: str) -> Tuple[str, str]:
    """
    Sort key approximating locale-aware ordering of package names.

    Names compare case-insensitively first; names equal up to case put the
    lowercase form first.
    """
    return (name.casefold(), name.swapcase())


def build_dependency_index(workspaces: Iterable[Workspace]) -> DependencyIndex:
    """
    Build the package -> version -> workspaces index.

    Each workspace contributes the merge of its three buckets
    (dependencies, then devDependencies, then peerDependencies, later ones
    overriding earlier ones), so a workspace appears at most once per package.
    """
    index: DependencyIndex = {}
    for workspace in workspaces:
        for package_name, version in workspace.manifest.all_dependencies().items():
            index.setdefault(package_name, {}).setdefault(version, []).append(workspace)
    return index


def sorted_index(index: DependencyIndex) -> List[Tuple[str, VersionMap]]:
    """Index entries sorted by package name, versions sorted within each entry."""
    entries = []
    for package_name in sorted(index, key=package_sort_key):
        versions = index[package_name]
        entries.append((package_name, {v: versions[v] for v in sorted(versions)}))
    return entries


def all_package_names(workspaces: Iterable[Workspace]) -> List[str]:
    """Every package declared by any workspace, sorted."""
    names = set()
    for workspace in workspaces:
        names.update(workspace.manifest.all_dependencies())
    return sorted(names, key=package_sort_key)
