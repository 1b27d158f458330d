"""
Utilities Module
================

Shared utilities for the monoalign SDK:
- Package manager detection and install invocation
"""

from .package_manager import (
    InstallGroup,
    InstallReport,
    SubprocessInstaller,
    detect_package_manager,
    group_install_targets,
    install_command,
    install_packages,
    manual_install_instructions,
)

__all__ = [
    "InstallGroup",
    "InstallReport",
    "SubprocessInstaller",
    "detect_package_manager",
    "group_install_targets",
    "install_command",
    "install_packages",
    "manual_install_instructions",
]
