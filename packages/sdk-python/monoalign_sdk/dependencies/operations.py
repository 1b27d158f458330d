"""
Package Operations
==================

Add, update and remove a dependency across selected workspaces, and collect
the version groups the single-package sync flow works from.

Every operation re-reads each target manifest before touching it and can run
as a dry run producing the same change records as the commit.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence

from monoalign_common import SYNC_BUCKETS, ValidationError, get_logger
from monoalign_schema import DependencyBucket

from ..manifest import find_bucket, manifest_path, read_manifest, write_manifest
from ..results import ChangeAction, ChangeRecord
from ..workspace import Workspace, WorkspaceSnapshot
from .index import VersionMap

logger = get_logger(__name__)


@dataclass
class UpdateConfig:
    """
    An add-or-update request.

    Attributes:
        package_name: Package to add or update
        version: Version spec to write
        bucket: Dependency bucket to write into
        target_workspaces: Workspace directories to touch
        dry_run: Only compute the change records
    """

    package_name: str
    version: str
    bucket: DependencyBucket = DependencyBucket.DEPENDENCIES
    target_workspaces: List[Path] = field(default_factory=list)
    dry_run: bool = True

    def __post_init__(self):
        self.package_name = self.package_name.strip()
        self.version = self.version.strip()
        self.bucket = DependencyBucket(self.bucket)
        if not self.package_name:
            raise ValidationError("Package name is required")
        if not self.version:
            raise ValidationError("Version is required")


def _targets(snapshot: WorkspaceSnapshot, paths: Iterable[Path]) -> List[Workspace]:
    workspaces = []
    for path in paths:
        workspace = snapshot.find(path)
        if workspace is None:
            logger.warning("Unknown workspace, ignoring", path=str(path))
            continue
        workspaces.append(workspace)
    return workspaces


def execute_update(snapshot: WorkspaceSnapshot, config: UpdateConfig) -> List[ChangeRecord]:
    """
    Set ``package_name`` to ``version`` in one bucket of every target.

    The bucket is created when missing. The record's action is ``add`` when
    the bucket did not declare the package before, ``update`` otherwise.
    """
    changes: List[ChangeRecord] = []
    bucket = config.bucket.value

    for workspace in _targets(snapshot, config.target_workspaces):
        path = manifest_path(workspace.path)
        data = read_manifest(path)
        deps = data.get(bucket)
        if not isinstance(deps, dict):
            deps = {}
        current = deps.get(config.package_name)

        changes.append(
            ChangeRecord(
                workspace=workspace.name,
                path=workspace.path,
                bucket=bucket,
                before=current,
                after=config.version,
                action=ChangeAction.UPDATE if current is not None else ChangeAction.ADD,
            )
        )

        if not config.dry_run:
            deps[config.package_name] = config.version
            data[bucket] = deps
            write_manifest(path, data)
            logger.info(
                "Set dependency",
                package=config.package_name,
                workspace=workspace.name,
                bucket=bucket,
                version=config.version,
            )

    return changes


def execute_removal(
    snapshot: WorkspaceSnapshot,
    package_name: str,
    target_workspaces: Sequence[Path],
    dry_run: bool,
) -> List[ChangeRecord]:
    """
    Remove a package from each target workspace.

    Only the first bucket (in priority order) declaring the package is
    touched. Workspaces not declaring it produce no record.
    """
    changes: List[ChangeRecord] = []

    for workspace in _targets(snapshot, target_workspaces):
        path = manifest_path(workspace.path)
        data = read_manifest(path)
        bucket = find_bucket(data, package_name)
        if bucket is None:
            continue

        changes.append(
            ChangeRecord(
                workspace=workspace.name,
                path=workspace.path,
                bucket=bucket,
                before=data[bucket][package_name],
                after=None,
                action=ChangeAction.REMOVE,
            )
        )

        if not dry_run:
            del data[bucket][package_name]
            write_manifest(path, data)
            logger.info("Removed dependency", package=package_name, workspace=workspace.name, bucket=bucket)

    return changes


def collect_sync_versions(workspaces: Iterable[Workspace], package_name: str) -> VersionMap:
    """
    Version groups for one package, as seen by the sync flow.

    Only dependencies and devDependencies are considered, devDependencies
    taking precedence when a workspace declares the package in both.
    """
    versions: VersionMap = {}
    for workspace in workspaces:
        merged = {}
        for bucket in SYNC_BUCKETS:
            merged.update(workspace.manifest.bucket(bucket))
        version = merged.get(package_name)
        if version:
            versions.setdefault(version, []).append(workspace)
    return versions


def workspaces_declaring(workspaces: Iterable[Workspace], package_name: str) -> List[Workspace]:
    """Workspaces declaring the package in any bucket."""
    return [w for w in workspaces if w.declares(package_name)]
