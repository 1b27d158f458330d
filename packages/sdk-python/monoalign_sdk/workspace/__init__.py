"""
Workspace Module
================

Discovery of monorepo workspaces and the immutable snapshot they live in.
"""

from .models import Workspace, WorkspaceSnapshot
from .scanner import scan_workspaces

__all__ = [
    "Workspace",
    "WorkspaceSnapshot",
    "scan_workspaces",
]
