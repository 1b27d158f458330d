"""
Package Manager Utilities
=========================

Detects the monorepo's package manager from its lockfile and runs the install
step for a set of workspace directories.

A failure in one directory is recorded and the remaining directories are
still attempted; nothing is retried.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from monoalign_common import InstallError, ManifestParseError, Timeouts, get_logger
from monoalign_common.constants import DEFAULT_PACKAGE_MANAGER, INSTALL_COMMANDS, LOCKFILES

from ..manifest import manifest_path, read_manifest
from ..results import unique_paths

logger = get_logger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass
class InstallGroup:
    """One package manager invocation and the workspaces it covers."""

    path: Path
    workspaces: List[Path] = field(default_factory=list)


@dataclass
class InstallReport:
    """
    Outcome of an install run.

    Attributes:
        manager: Package manager used
        succeeded: Directories where the install finished
        failed: Directory -> error message
    """

    manager: str = DEFAULT_PACKAGE_MANAGER
    succeeded: List[Path] = field(default_factory=list)
    failed: Dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def detect_package_manager(root: Path) -> str:
    """Pick the package manager from the lockfile present at the root."""
    for lockfile, manager in LOCKFILES:
        if (Path(root) / lockfile).exists():
            return manager
    return DEFAULT_PACKAGE_MANAGER


def install_command(manager: str) -> List[str]:
    """Command line for a manager's install step."""
    return list(INSTALL_COMMANDS.get(manager, INSTALL_COMMANDS[DEFAULT_PACKAGE_MANAGER]))


def _root_declares_workspaces(root: Path) -> bool:
    path = manifest_path(root)
    if not path.is_file():
        return False
    try:
        return read_manifest(path).get("workspaces") is not None
    except ManifestParseError as e:
        logger.warning("Cannot read root manifest, installing per workspace", error=str(e))
        return False


def group_install_targets(paths: Sequence[Path], root: Path) -> List[InstallGroup]:
    """
    Group workspace directories into install invocations.

    When the root manifest declares workspaces, one install at the root
    covers everything; otherwise each directory is installed on its own.
    """
    root = Path(root)
    targets = unique_paths(paths)
    if _root_declares_workspaces(root):
        return [InstallGroup(path=root, workspaces=targets)]
    return [InstallGroup(path=path, workspaces=[path]) for path in targets]


def _run_install(command: List[str], cwd: Path, timeout: float, runner: Runner) -> None:
    try:
        result = runner(command, cwd=str(cwd), capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise InstallError(cwd, f"timed out after {timeout:g}s") from e
    except FileNotFoundError as e:
        raise InstallError(cwd, f"'{command[0]}' is not installed") from e
    except OSError as e:
        raise InstallError(cwd, str(e)) from e

    if result.returncode != 0:
        raise InstallError(cwd, (result.stderr or "").strip() or f"exit code {result.returncode}")


def install_packages(
    paths: Sequence[Path],
    root: Path,
    timeout: float = Timeouts.INSTALL,
    runner: Optional[Runner] = None,
    manager: Optional[str] = None,
) -> InstallReport:
    """
    Run the install step for the given workspaces.

    Args:
        paths: Workspace directories that changed
        root: Monorepo root (lockfile detection and grouping)
        timeout: Bound for each invocation, after which it is killed
        runner: subprocess.run compatible callable
        manager: Override lockfile detection

    Returns:
        Per-directory outcome; never raises for a single directory's failure
    """
    runner = runner or subprocess.run
    manager = manager or detect_package_manager(root)
    command = install_command(manager)
    report = InstallReport(manager=manager)

    for group in group_install_targets(paths, root):
        logger.info("Installing packages", directory=str(group.path), command=" ".join(command))
        try:
            _run_install(command, group.path, timeout, runner)
        except InstallError as e:
            logger.error("Install failed", directory=str(group.path), error=e.reason)
            report.failed[group.path] = e.reason
            continue
        report.succeeded.append(group.path)

    return report


def manual_install_instructions(paths: Sequence[Path], root: Path, manager: Optional[str] = None) -> List[tuple]:
    """
    Commands a user can run by hand after a failed install.

    Returns:
        List of (relative directory, command string) pairs
    """
    root = Path(root)
    command = " ".join(install_command(manager or detect_package_manager(root)))
    instructions = []
    for group in group_install_targets(paths, root):
        try:
            relative = str(group.path.relative_to(root))
        except ValueError:
            relative = str(group.path)
        instructions.append((relative if relative != "." else ".", command))
    return instructions


class SubprocessInstaller:
    """Installer capability backed by ``install_packages``."""

    def __init__(self, root: Path, timeout: float = Timeouts.INSTALL, runner: Optional[Runner] = None):
        self.root = Path(root)
        self.timeout = timeout
        self.runner = runner

    def __call__(self, paths: Sequence[Path]) -> InstallReport:
        return install_packages(paths, self.root, timeout=self.timeout, runner=self.runner)
