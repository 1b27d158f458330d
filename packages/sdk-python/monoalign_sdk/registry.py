"""
Registry Lookup
===============

Best-effort query for a package's latest published version, using
``npm view <package> version``.

Every failure (npm missing, non-zero exit, timeout, empty output) is
recovered locally and reported as "no latest version available".
"""

import subprocess
from typing import Callable, Dict, Optional

from monoalign_common import RegistryLookupError, Timeouts, get_logger

logger = get_logger(__name__)


class RegistryClient:
    """
    Latest-version lookups, memoised for the lifetime of the client.

    Examples:
        >>> client = RegistryClient(timeout=10)
        >>> client.latest_version("react")
        '19.1.0'
        >>> client.latest_version("definitely-not-a-package-xyz") is None
        True
    """

    def __init__(
        self,
        timeout: float = Timeouts.REGISTRY,
        enabled: bool = True,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        self.timeout = timeout
        self.enabled = enabled
        self._runner = runner or subprocess.run
        self._cache: Dict[str, Optional[str]] = {}

    def _query(self, package_name: str) -> str:
        command = ["npm", "view", package_name, "version"]
        try:
            result = self._runner(command, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise RegistryLookupError(package_name, f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise RegistryLookupError(package_name, str(e)) from e

        if result.returncode != 0:
            reason = (result.stderr or "").strip() or f"exit code {result.returncode}"
            raise RegistryLookupError(package_name, reason)

        version = (result.stdout or "").strip()
        if not version:
            raise RegistryLookupError(package_name, "empty response")
        return version

    def latest_version(self, package_name: str) -> Optional[str]:
        """Latest published version, or None when unavailable."""
        if not self.enabled:
            return None
        if package_name in self._cache:
            return self._cache[package_name]

        try:
            version: Optional[str] = self._query(package_name)
        except RegistryLookupError as e:
            logger.debug("Registry lookup failed", package=package_name, reason=e.reason)
            version = None

        self._cache[package_name] = version
        return version
