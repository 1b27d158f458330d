"""
monoalign Error Classes

Every error raised by monoalign packages derives from MonoalignError so the
CLI can render them uniformly and map them to exit codes.

Usage:
    from monoalign_common.errors import ScanError

    raise ScanError("Invalid JSON in package.json", path=manifest_path)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union


class MonoalignError(Exception):
    """
    Base class for all monoalign errors.

    Attributes:
        message: Human readable description
        code: Stable machine readable error code
    """

    code = "MONOALIGN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error for JSON output."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }


class ValidationError(MonoalignError):
    """Invalid user input (empty package name, malformed version, ...)."""

    code = "VALIDATION_ERROR"


class ConfigError(MonoalignError):
    """Settings file or environment values could not be loaded."""

    code = "CONFIG_ERROR"


class _PathError(MonoalignError):
    """Error bound to a file on disk."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["path"] = str(self.path) if self.path else None
        return data


class ScanError(_PathError):
    """
    A workspace manifest exists but is not valid JSON.

    Fatal for the run: writing back into a broken manifest would corrupt it
    further, so scanning stops instead of skipping the workspace.
    """

    code = "SCAN_ERROR"


class ManifestParseError(_PathError):
    """Manifest content could not be parsed."""

    code = "MANIFEST_PARSE_ERROR"


class ManifestWriteError(_PathError):
    """Manifest could not be persisted."""

    code = "MANIFEST_WRITE_ERROR"


class RegistryLookupError(MonoalignError):
    """Registry query failed. Never surfaced to the user."""

    code = "REGISTRY_LOOKUP_ERROR"

    def __init__(self, package: str, reason: str):
        self.package = package
        self.reason = reason
        super().__init__(f"Registry lookup failed for '{package}': {reason}")


class InstallError(MonoalignError):
    """Package manager invocation failed or timed out for one directory."""

    code = "INSTALL_ERROR"

    def __init__(self, directory: Union[str, Path], reason: str):
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f"Installation failed in {self.directory}: {reason}")


class ReleaseError(MonoalignError):
    """A step of the release flow failed."""

    code = "RELEASE_ERROR"

    def __init__(self, step: str, reason: str):
        self.step = step
        self.reason = reason
        super().__init__(f"Release step '{step}' failed: {reason}")


class OperationCancelled(MonoalignError):
    """The user aborted an interactive prompt."""

    code = "CANCELLED"

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)
