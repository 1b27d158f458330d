"""
monoalign Common Package

Shared primitives used by every monoalign package:
- Exception classes for consistent error handling
- Constants for file names, dependency buckets and timeouts
- Structured logger
- Settings loading

Usage:
    from monoalign_common import ScanError, get_logger, load_settings
    from monoalign_common import DEPENDENCY_BUCKET_PRIORITY, Timeouts
"""

# Error classes
from .errors import (
    MonoalignError,
    ValidationError,
    ConfigError,
    ScanError,
    ManifestParseError,
    ManifestWriteError,
    RegistryLookupError,
    InstallError,
    ReleaseError,
    OperationCancelled,
)

# Constants
from .constants import (
    MONOALIGN_VERSION,
    MANIFEST_FILENAME,
    SETTINGS_FILENAME,
    CHANGELOG_FILENAME,
    DEPENDENCY_BUCKET_PRIORITY,
    SYNC_BUCKETS,
    LATEST_TAG,
    Timeouts,
    EnvVars,
    ExitCodes,
)

# Logger
from .logger import (
    MonoalignLogger,
    get_logger,
    configure_logging,
    set_run_id,
    get_run_id,
    clear_run_id,
)

# Settings
from .config import MonoalignSettings, load_settings

__version__ = MONOALIGN_VERSION

__all__ = [
    # Errors
    "MonoalignError",
    "ValidationError",
    "ConfigError",
    "ScanError",
    "ManifestParseError",
    "ManifestWriteError",
    "RegistryLookupError",
    "InstallError",
    "ReleaseError",
    "OperationCancelled",
    # Constants
    "MONOALIGN_VERSION",
    "MANIFEST_FILENAME",
    "SETTINGS_FILENAME",
    "CHANGELOG_FILENAME",
    "DEPENDENCY_BUCKET_PRIORITY",
    "SYNC_BUCKETS",
    "LATEST_TAG",
    "Timeouts",
    "EnvVars",
    "ExitCodes",
    # Logger
    "MonoalignLogger",
    "get_logger",
    "configure_logging",
    "set_run_id",
    "get_run_id",
    "clear_run_id",
    # Settings
    "MonoalignSettings",
    "load_settings",
]
