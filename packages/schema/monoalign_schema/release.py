"""
monoalign Release Schema

Validated description of a release request: the version being cut, the
notes that go into the changelog and tag message, and whether to push.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

RELEASE_VERSION_PATTERN = r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?$"
"""Accepted release versions: X.Y.Z with an optional -prerelease suffix"""


class BumpKind(str, Enum):
    """How to derive the next release version from the current one."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"


class ReleaseRequest(BaseModel):
    """A fully specified release."""

    model_config = ConfigDict(frozen=True)

    version: str
    notes: str = ""
    push: bool = False
    dry_run: bool = True

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        v = v.strip().lstrip("v")
        if not re.match(RELEASE_VERSION_PATTERN, v):
            raise ValueError(f"Invalid release version: '{v}'. Expected X.Y.Z or X.Y.Z-prerelease")
        return v

    @property
    def tag(self) -> str:
        """Git tag name for this release."""
        return f"v{self.version}"

    @property
    def commit_message(self) -> str:
        return f"chore(release): {self.tag}"

    def tag_message(self) -> str:
        """Annotated tag message: the notes, or the release title if empty."""
        return self.notes.strip() or f"Release {self.tag}"

    def changelog_section(self, date: str, previous: Optional[str] = None) -> str:
        """Markdown section prepended to the changelog."""
        lines = [f"## {self.version} - {date}", ""]
        body = self.notes.strip()
        lines.append(body if body else "_No release notes._")
        if previous:
            lines.extend(["", f"Previous version: {previous}"])
        return "\n".join(lines) + "\n"
