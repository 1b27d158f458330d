"""
Capabilities
============

The small interface through which the resolution engine and the flows reach
the outside world. The CLI implements it with rich prompts; tests implement
it with scripted fakes.

    Prompter.choose_version(prompt) -> VersionChoice
    Prompter.confirm(message, default) -> bool
    Installer(paths) -> InstallReport

Prompters raise OperationCancelled when the user aborts a prompt.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .utils.package_manager import InstallReport


class ChoiceKind(str, Enum):
    """Kinds of answer to a version prompt."""

    VERSION = "version"  # One of the versions already in use
    LATEST = "latest"  # Latest version from the registry
    CUSTOM = "custom"  # A literal typed by the user
    SKIP = "skip"  # Leave the package alone


@dataclass(frozen=True)
class VersionChoice:
    """Answer to a version prompt."""

    kind: ChoiceKind
    version: Optional[str] = None

    @classmethod
    def use(cls, version: str) -> "VersionChoice":
        return cls(ChoiceKind.VERSION, version)

    @classmethod
    def latest(cls) -> "VersionChoice":
        return cls(ChoiceKind.LATEST)

    @classmethod
    def custom(cls, version: str) -> "VersionChoice":
        return cls(ChoiceKind.CUSTOM, version)

    @classmethod
    def skip(cls) -> "VersionChoice":
        return cls(ChoiceKind.SKIP)


@dataclass(frozen=True)
class VersionPrompt:
    """
    Everything a prompter needs to ask for one package's target version.

    Attributes:
        package_name: Package being resolved
        usage: Version in use -> names of workspaces using it
        latest_version: Registry version, when already looked up
        latest_is_newer: Result of the "is newer" heuristic for latest_version
        detailed: Show the full per-workspace context before asking
        allow_custom: Offer a free-form version
    """

    package_name: str
    usage: Dict[str, List[str]]
    latest_version: Optional[str] = None
    latest_is_newer: bool = False
    detailed: bool = False
    allow_custom: bool = True

    @property
    def versions(self) -> List[str]:
        return list(self.usage)


@runtime_checkable
class Prompter(Protocol):
    """Interactive decisions requested by the engine."""

    def choose_version(self, prompt: VersionPrompt) -> VersionChoice:
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        ...


class Installer(Protocol):
    """Runs the package manager for a set of workspace directories."""

    def __call__(self, paths: Sequence[Path]) -> InstallReport:
        ...


class RegistryLookup(Protocol):
    """Best-effort latest-version query."""

    def latest_version(self, package_name: str) -> Optional[str]:
        ...
