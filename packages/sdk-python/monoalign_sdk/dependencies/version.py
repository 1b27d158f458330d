"""
Version Helpers
===============

monoalign treats dependency version specs as opaque strings. This module holds
the two places where a version is looked into:

- the "is newer" registry hint, a string heuristic rather than a semver
  comparison (a pre-release or older registry version can be reported as
  newer)
- release version bumping, which parses plain X.Y.Z[-prerelease] versions
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from monoalign_common import ValidationError
from monoalign_common.constants import RANGE_PREFIX_CHARS
from monoalign_schema import BumpKind

_SEMVER_PATTERN = r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"


def strip_range_prefix(version: str) -> str:
    """Remove every ``^`` and ``~`` from a version spec."""
    return re.sub(f"[{re.escape(RANGE_PREFIX_CHARS)}]", "", version)


def is_version_newer(latest_version: str, current_versions: Iterable[str]) -> bool:
    """
    Heuristic: is the registry version absent from the versions in use?

    Range prefixes are stripped from both sides and the strings compared for
    equality. Anything not already in use counts as "newer".
    """
    cleaned_latest = strip_range_prefix(latest_version)
    return cleaned_latest not in {strip_range_prefix(v) for v in current_versions}


@dataclass(frozen=True)
class Version:
    """
    A parsed X.Y.Z[-prerelease] version.

    Supports formats like:
    - 1.0.0
    - 2.5.3-beta.1
    - 0.1.0-0
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: Optional[str] = None

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            base += f"-{self.prerelease}"
        return base

    def as_tuple(self) -> Tuple[int, int, int, int, str]:
        """Releases sort after their pre-releases."""
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, self.prerelease or "")

    def __lt__(self, other: "Version") -> bool:
        return self.as_tuple() < other.as_tuple()


def parse_version(version_str: str) -> Version:
    """
    Parse a version string.

    Raises:
        ValueError: If the string is not X.Y.Z[-prerelease]
    """
    match = re.match(_SEMVER_PATTERN, version_str.strip())
    if not match:
        raise ValueError(f"Invalid version string: '{version_str}'")
    return Version(
        major=int(match.group(1)),
        minor=int(match.group(2)),
        patch=int(match.group(3)),
        prerelease=match.group(4),
    )


def _bump_prerelease(version: Version) -> Version:
    if not version.prerelease:
        return Version(version.major, version.minor, version.patch + 1, "0")

    parts = version.prerelease.split(".")
    if parts[-1].isdigit():
        parts[-1] = str(int(parts[-1]) + 1)
    else:
        parts.append("0")
    return Version(version.major, version.minor, version.patch, ".".join(parts))


def bump_version(current: Union[str, Version], kind: Union[BumpKind, str]) -> str:
    """
    Compute the next release version.

    Examples:
        >>> bump_version("1.2.3", "minor")
        '1.3.0'
        >>> bump_version("1.2.3", "prerelease")
        '1.2.4-0'
        >>> bump_version("1.2.4-beta.1", "prerelease")
        '1.2.4-beta.2'
        >>> bump_version("2.0.0-rc.1", "patch")
        '2.0.0'

    Raises:
        ValidationError: If the current version cannot be parsed
    """
    try:
        version = current if isinstance(current, Version) else parse_version(current)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    kind = BumpKind(kind)
    if kind is BumpKind.MAJOR:
        if version.prerelease and version.minor == 0 and version.patch == 0:
            return str(Version(version.major, 0, 0))
        return str(Version(version.major + 1))
    if kind is BumpKind.MINOR:
        if version.prerelease and version.patch == 0:
            return str(Version(version.major, version.minor, 0))
        return str(Version(version.major, version.minor + 1))
    if kind is BumpKind.PATCH:
        if version.prerelease:
            return str(Version(version.major, version.minor, version.patch))
        return str(Version(version.major, version.minor, version.patch + 1))
    return str(_bump_prerelease(version))
