"""
monoalign Schema Package

Pydantic models for package.json manifests and release requests.

Usage:
    from monoalign_schema import PackageManifest, DependencyBucket, WorkspaceKind
    from monoalign_schema import ReleaseRequest, BumpKind
"""

from .manifest import DependencyBucket, PackageManifest, WorkspaceKind
from .release import RELEASE_VERSION_PATTERN, BumpKind, ReleaseRequest

__all__ = [
    # Manifest
    "DependencyBucket",
    "PackageManifest",
    "WorkspaceKind",
    # Release
    "RELEASE_VERSION_PATTERN",
    "BumpKind",
    "ReleaseRequest",
]
