"""
monoalign Shared Constants

Single source of truth for file names, dependency buckets, timeouts and
other values shared between the SDK and the CLI.

Usage:
    from monoalign_common.constants import DEPENDENCY_BUCKET_PRIORITY, Timeouts

    for bucket in DEPENDENCY_BUCKET_PRIORITY:
        ...
"""

# =============================================================================
# VERSION INFORMATION
# =============================================================================

MONOALIGN_VERSION = "0.1.0"
"""Current monoalign release"""


# =============================================================================
# MANIFEST LAYOUT
# =============================================================================

MANIFEST_FILENAME = "package.json"
"""Name of the dependency manifest inside every workspace"""

SETTINGS_FILENAME = ".monoalign.yaml"
"""Optional per-repository settings file at the monorepo root"""

CHANGELOG_FILENAME = "CHANGELOG.md"
"""Changelog updated by the release flow"""

MANIFEST_INDENT = 2
"""Indentation used when serializing manifests"""

DEPENDENCY_BUCKET_PRIORITY = ("dependencies", "devDependencies", "peerDependencies")
"""
Dependency buckets in lookup priority order.

When a package must be located inside one workspace, buckets are consulted in
this order and the first match wins. Index building merges them in the same
order, so a later bucket overrides an earlier one.
"""

SYNC_BUCKETS = ("dependencies", "devDependencies")
"""Buckets considered by the single-package sync flow"""

ROOT_WORKSPACE_NAME = "root"
"""Fallback name for a root manifest without a name field"""


# =============================================================================
# WORKSPACE DISCOVERY
# =============================================================================

WORKSPACE_KIND_DIRS = {"apps": "app", "packages": "package"}
"""Directories scanned one level deep and the workspace kind they produce"""

DEFAULT_WORKSPACE_DIRS = ["apps", "packages"]
"""Default scan order for workspace directories"""


# =============================================================================
# PACKAGE MANAGERS
# =============================================================================

LOCKFILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
)
"""Lockfile to package manager mapping, checked in order"""

DEFAULT_PACKAGE_MANAGER = "npm"
"""Package manager used when no lockfile is found"""

INSTALL_COMMANDS = {
    "pnpm": ["pnpm", "install"],
    "yarn": ["yarn"],
    "bun": ["bun", "install"],
    "npm": ["npm", "install"],
}
"""Install invocation per package manager"""


# =============================================================================
# REGISTRY
# =============================================================================

LATEST_TAG = "latest"
"""Literal version used when the registry cannot be queried"""

RANGE_PREFIX_CHARS = "^~"
"""Range prefixes stripped by the 'is newer' heuristic"""


# =============================================================================
# TIMEOUTS (seconds)
# =============================================================================


class Timeouts:
    """Bounded waits for external processes."""

    INSTALL = 300
    """One package manager invocation (5 minutes)"""

    REGISTRY = 10
    """One `npm view` lookup"""

    GIT = 60
    """One git command during the release flow"""


# =============================================================================
# ENVIRONMENT VARIABLE NAMES
# =============================================================================


class EnvVars:
    """Environment variables read by monoalign."""

    PREFIX = "MONOALIGN_"
    LOG_LEVEL = "MONOALIGN_LOG_LEVEL"
    LOG_JSON = "MONOALIGN_LOG_JSON"
    INSTALL_TIMEOUT = "MONOALIGN_INSTALL_TIMEOUT"
    REGISTRY_TIMEOUT = "MONOALIGN_REGISTRY_TIMEOUT"
    REGISTRY_ENABLED = "MONOALIGN_REGISTRY_ENABLED"


# =============================================================================
# EXIT CODES
# =============================================================================


class ExitCodes:
    """Process exit codes chosen by the CLI dispatcher."""

    SUCCESS = 0
    ERROR = 1
    CANCELLED = 130


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
"""Valid log levels for settings validation"""
