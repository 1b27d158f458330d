"""
Workspace Scanner
=================

Discovers workspaces in the fixed monorepo layout:

    <root>/package.json           -> kind=root
    <root>/apps/<name>/package.json      -> kind=app
    <root>/packages/<name>/package.json  -> kind=package

Directories without a manifest are skipped. A manifest that exists but is
not valid JSON, or is not a JSON object, aborts the scan with ScanError.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from monoalign_common import MANIFEST_FILENAME, ScanError, get_logger
from monoalign_common.constants import (
    DEFAULT_WORKSPACE_DIRS,
    ROOT_WORKSPACE_NAME,
    WORKSPACE_KIND_DIRS,
)
from monoalign_schema import PackageManifest, WorkspaceKind

from .models import Workspace, WorkspaceSnapshot

logger = get_logger(__name__)


def _load_manifest(manifest_path: Path) -> PackageManifest:
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ScanError(f"Invalid JSON in manifest: {e}", path=manifest_path) from e
    except OSError as e:
        raise ScanError(f"Cannot read manifest: {e}", path=manifest_path) from e

    if not isinstance(data, dict):
        raise ScanError("Manifest must be a JSON object", path=manifest_path)

    return PackageManifest.model_validate(data)


def _scan_children(directory: Path, kind: WorkspaceKind) -> List[Workspace]:
    if not directory.is_dir():
        return []

    found: List[Workspace] = []
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        manifest_path = child / MANIFEST_FILENAME
        if not child.is_dir() or not manifest_path.is_file():
            continue
        manifest = _load_manifest(manifest_path)
        found.append(
            Workspace(
                path=child.resolve(),
                name=manifest.name or child.name,
                kind=kind,
                manifest=manifest,
            )
        )
        logger.debug("Found workspace", path=str(child), kind=kind.value)
    return found


def scan_workspaces(
    root: Path,
    workspace_dirs: Optional[Sequence[str]] = None,
) -> WorkspaceSnapshot:
    """
    Scan a monorepo and return its workspace inventory.

    Args:
        root: Monorepo root directory
        workspace_dirs: Directories scanned one level deep, in order.
            ``apps`` yields app workspaces, anything else package workspaces.

    Returns:
        Snapshot ordered root, apps, packages

    Raises:
        ScanError: If a discovered manifest cannot be parsed
    """
    root = Path(root).resolve()
    workspaces: List[Workspace] = []

    root_manifest = root / MANIFEST_FILENAME
    if root_manifest.is_file():
        manifest = _load_manifest(root_manifest)
        workspaces.append(
            Workspace(
                path=root,
                name=manifest.name or ROOT_WORKSPACE_NAME,
                kind=WorkspaceKind.ROOT,
                manifest=manifest,
            )
        )

    for dir_name in workspace_dirs or DEFAULT_WORKSPACE_DIRS:
        kind = WorkspaceKind(WORKSPACE_KIND_DIRS.get(dir_name, WorkspaceKind.PACKAGE.value))
        workspaces.extend(_scan_children(root / dir_name, kind))

    logger.info("Scanned workspaces", root=str(root), count=len(workspaces))
    return WorkspaceSnapshot(root=root, workspaces=tuple(workspaces))
