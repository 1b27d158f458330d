"""
monoalign Dependency Management
===============================

Provides utilities for:
- Indexing which versions of each package are used by which workspaces
- Detecting packages declared at more than one version
- Resolving conflicts with manual, bulk, most-common and latest strategies
- Adding, updating, removing and syncing a single dependency
"""

from .conflicts import Conflict, find_conflicts, select_conflicts
from .index import (
    DependencyIndex,
    VersionMap,
    all_package_names,
    build_dependency_index,
    package_sort_key,
    sorted_index,
)
from .operations import (
    UpdateConfig,
    collect_sync_versions,
    execute_removal,
    execute_update,
    workspaces_declaring,
)
from .resolver import (
    ResolutionAborted,
    ResolutionEngine,
    ResolutionOutcome,
    ResolutionStrategy,
    sync_to_version,
)
from .version import Version, bump_version, is_version_newer, parse_version, strip_range_prefix

__all__ = [
    # Index
    "DependencyIndex",
    "VersionMap",
    "build_dependency_index",
    "sorted_index",
    "all_package_names",
    "package_sort_key",
    # Conflicts
    "Conflict",
    "find_conflicts",
    "select_conflicts",
    # Resolution
    "ResolutionEngine",
    "ResolutionOutcome",
    "ResolutionAborted",
    "ResolutionStrategy",
    "sync_to_version",
    # Operations
    "UpdateConfig",
    "execute_update",
    "execute_removal",
    "collect_sync_versions",
    "workspaces_declaring",
    # Versions
    "Version",
    "parse_version",
    "bump_version",
    "is_version_newer",
    "strip_range_prefix",
]
