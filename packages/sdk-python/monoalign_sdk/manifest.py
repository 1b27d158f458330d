"""
Manifest Writer
===============

Reads and rewrites ``package.json`` documents.

The whole parsed document is round-tripped, so fields monoalign does not know
about are preserved. Keys keep the order they were read in; output uses
2-space indentation and a trailing newline. Files are overwritten in place
without locking.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from monoalign_common import (
    DEPENDENCY_BUCKET_PRIORITY,
    MANIFEST_FILENAME,
    ManifestParseError,
    ManifestWriteError,
    get_logger,
)
from monoalign_common.constants import MANIFEST_INDENT

logger = get_logger(__name__)

Manifest = Dict[str, Any]


def manifest_path(workspace_dir: Union[str, Path]) -> Path:
    """Location of the manifest inside a workspace directory."""
    return Path(workspace_dir) / MANIFEST_FILENAME


def read_manifest(path: Union[str, Path]) -> Manifest:
    """
    Read and parse a manifest.

    Args:
        path: Path to package.json

    Returns:
        The parsed document, key order preserved

    Raises:
        ManifestParseError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestParseError(f"Cannot read manifest: {e}", path=path) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ManifestParseError("Manifest must be a JSON object", path=path)

    logger.debug("Read manifest", path=str(path))
    return data


def serialize_manifest(data: Manifest) -> str:
    """Serialize a manifest the way it is written to disk."""
    return json.dumps(data, indent=MANIFEST_INDENT, ensure_ascii=False) + "\n"


def write_manifest(path: Union[str, Path], data: Manifest) -> None:
    """
    Overwrite a manifest in place.

    Raises:
        ManifestWriteError: If the file cannot be written
    """
    path = Path(path)
    content = serialize_manifest(data)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ManifestWriteError(f"Cannot write manifest: {e}", path=path) from e
    logger.debug("Wrote manifest", path=str(path))


def find_bucket(data: Manifest, package_name: str) -> Optional[str]:
    """
    Locate the bucket declaring a package in a raw manifest.

    Buckets are consulted in DEPENDENCY_BUCKET_PRIORITY order and the first
    match wins.
    """
    for bucket in DEPENDENCY_BUCKET_PRIORITY:
        deps = data.get(bucket)
        if isinstance(deps, dict) and package_name in deps:
            return bucket
    return None
