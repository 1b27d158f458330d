"""
monoalign SDK

Workspace scanning, dependency indexing, conflict detection and resolution,
package operations, installs and releases for JavaScript monorepos.

Usage:
    from monoalign_sdk import scan_workspaces, build_dependency_index, find_conflicts
    from monoalign_sdk import ResolutionEngine, RegistryClient

    snapshot = scan_workspaces(Path("."))
    conflicts = find_conflicts(build_dependency_index(snapshot))
    outcome = ResolutionEngine(registry=RegistryClient()).resolve_most_common(conflicts)
"""

from .capabilities import ChoiceKind, Installer, Prompter, RegistryLookup, VersionChoice, VersionPrompt
from .dependencies import (
    Conflict,
    DependencyIndex,
    ResolutionAborted,
    ResolutionEngine,
    ResolutionOutcome,
    ResolutionStrategy,
    UpdateConfig,
    VersionMap,
    all_package_names,
    build_dependency_index,
    bump_version,
    collect_sync_versions,
    execute_removal,
    execute_update,
    find_conflicts,
    is_version_newer,
    select_conflicts,
    sorted_index,
    sync_to_version,
    workspaces_declaring,
)
from .manifest import find_bucket, manifest_path, read_manifest, serialize_manifest, write_manifest
from .registry import RegistryClient
from .release import GitClient, ReleaseOutcome, current_release_version, run_release
from .results import ChangeAction, ChangeRecord, OperationResult, OperationStatus
from .utils import (
    InstallReport,
    SubprocessInstaller,
    detect_package_manager,
    install_packages,
    manual_install_instructions,
)
from .workspace import Workspace, WorkspaceSnapshot, scan_workspaces

__version__ = "0.1.0"

__all__ = [
    # Workspaces
    "Workspace",
    "WorkspaceSnapshot",
    "scan_workspaces",
    # Manifests
    "manifest_path",
    "read_manifest",
    "write_manifest",
    "serialize_manifest",
    "find_bucket",
    # Dependencies
    "DependencyIndex",
    "VersionMap",
    "build_dependency_index",
    "sorted_index",
    "all_package_names",
    "Conflict",
    "find_conflicts",
    "select_conflicts",
    "ResolutionEngine",
    "ResolutionOutcome",
    "ResolutionAborted",
    "ResolutionStrategy",
    "sync_to_version",
    "UpdateConfig",
    "execute_update",
    "execute_removal",
    "collect_sync_versions",
    "workspaces_declaring",
    "bump_version",
    "is_version_newer",
    # Capabilities
    "ChoiceKind",
    "VersionChoice",
    "VersionPrompt",
    "Prompter",
    "Installer",
    "RegistryLookup",
    # Results
    "ChangeAction",
    "ChangeRecord",
    "OperationResult",
    "OperationStatus",
    # Registry, installs, releases
    "RegistryClient",
    "InstallReport",
    "SubprocessInstaller",
    "detect_package_manager",
    "install_packages",
    "manual_install_instructions",
    "GitClient",
    "ReleaseOutcome",
    "current_release_version",
    "run_release",
]
