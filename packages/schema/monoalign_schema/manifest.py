"""
monoalign Manifest Schema

Pydantic models describing the parts of ``package.json`` that monoalign reads.

Design Principles:
- Pure validation: receives parsed dicts, returns typed views
- No file I/O: reading and writing manifests is the SDK's responsibility
- Lenient: unknown fields are accepted and ignored, since the on-disk
  document is always round-tripped from the raw dict, never from the model

Usage:
    from monoalign_schema import PackageManifest

    manifest = PackageManifest.model_validate(json.loads(text))
    manifest.all_dependencies()
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from monoalign_common import DEPENDENCY_BUCKET_PRIORITY


class DependencyBucket(str, Enum):
    """One of the three dependency classifications of a manifest."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"

    @classmethod
    def priority(cls) -> tuple["DependencyBucket", ...]:
        """Buckets in lookup priority order."""
        return tuple(cls(name) for name in DEPENDENCY_BUCKET_PRIORITY)


class WorkspaceKind(str, Enum):
    """Where a workspace sits in the monorepo."""

    ROOT = "root"
    APP = "app"
    PACKAGE = "package"


class PackageManifest(BaseModel):
    """
    Typed view of a package.json document.

    Only ``name``, ``version``, ``workspaces`` and the three dependency buckets
    are modelled. Any parsed JSON object validates: values of an unexpected
    type are dropped from the view rather than rejected, and dependency specs
    that are not strings are left out of the buckets. The raw document is
    what gets written back, so nothing dropped here is lost on disk.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    version: Optional[str] = None
    workspaces: Optional[Any] = None
    dependencies: Dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    peer_dependencies: Dict[str, str] = Field(default_factory=dict, alias="peerDependencies")

    @field_validator("name", "version", mode="before")
    @classmethod
    def string_or_none(cls, v: Any) -> Any:
        """Ignore a name or version that is not a string."""
        return v if isinstance(v, str) else None

    @field_validator("dependencies", "dev_dependencies", "peer_dependencies", mode="before")
    @classmethod
    def string_specs_only(cls, v: Any) -> Dict[str, str]:
        """Keep the string-valued entries of a bucket; anything else is an empty bucket."""
        if not isinstance(v, dict):
            return {}
        return {name: spec for name, spec in v.items() if isinstance(spec, str)}

    def bucket(self, bucket: Union[DependencyBucket, str]) -> Dict[str, str]:
        """Get one dependency bucket by its manifest key."""
        key = DependencyBucket(bucket)
        if key is DependencyBucket.DEPENDENCIES:
            return self.dependencies
        if key is DependencyBucket.DEV_DEPENDENCIES:
            return self.dev_dependencies
        return self.peer_dependencies

    def all_dependencies(self) -> Dict[str, str]:
        """
        Merge the three buckets into one mapping.

        Buckets are merged in priority order, so a package declared in more
        than one bucket keeps the value from the last one.
        """
        merged: Dict[str, str] = {}
        for bucket in DependencyBucket.priority():
            merged.update(self.bucket(bucket))
        return merged

    def find_bucket(self, package_name: str) -> Optional[DependencyBucket]:
        """First bucket in priority order declaring the package, if any."""
        for bucket in DependencyBucket.priority():
            if package_name in self.bucket(bucket):
                return bucket
        return None

    @property
    def declares_workspaces(self) -> bool:
        """Whether the manifest has a workspaces field."""
        return self.workspaces is not None
