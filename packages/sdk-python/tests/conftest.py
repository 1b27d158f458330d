"""Pytest configuration and fixtures for SDK tests.

Monorepos are built on disk under tmp_path; prompts, the registry and
subprocesses are replaced by scripted fakes.
"""
import itertools
import json
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from monoalign_sdk import VersionChoice, VersionPrompt


def pytest_configure(config):
    """Configure pytest with custom markers and path setup."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path."""
    package_root_str = str(Path(__file__).parent.parent)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)
    yield


@pytest.fixture
def manifest_of():
    """Read the package.json of a workspace directory."""

    def _read(directory: Path) -> dict:
        return json.loads((Path(directory) / "package.json").read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def make_monorepo(tmp_path):
    """
    Write manifests into a fresh repository.

    Keys are directories relative to the root ("." for the root itself).
    """
    counter = itertools.count(1)

    def _make(manifests: Dict[str, dict]) -> Path:
        root = tmp_path / f"repo{next(counter)}"
        root.mkdir()
        for rel, data in manifests.items():
            directory = root / rel
            directory.mkdir(parents=True, exist_ok=True)
            (directory / "package.json").write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def scenario_repo(make_monorepo):
    """Root without deps, apps/a on dep ^1.0.0, packages/b on dep ^2.0.0 (dev)."""
    return make_monorepo(
        {
            ".": {"name": "root", "private": True, "workspaces": ["apps/*", "packages/*"]},
            "apps/a": {"name": "a", "version": "1.0.0", "dependencies": {"dep": "^1.0.0"}},
            "packages/b": {"name": "b", "version": "1.0.0", "devDependencies": {"dep": "^2.0.0"}},
        }
    )


@pytest.fixture
def busy_repo(make_monorepo):
    """Several conflicts: react (2 vs 1), typescript (1 vs 1 vs 1), lodash consistent."""
    return make_monorepo(
        {
            ".": {"name": "monorepo", "version": "1.2.3", "devDependencies": {"typescript": "^5.0.0"}},
            "apps/web": {
                "name": "web",
                "version": "0.1.0",
                "dependencies": {"react": "^18.2.0", "lodash": "^4.17.21"},
                "devDependencies": {"typescript": "^5.4.0"},
            },
            "apps/admin": {"name": "admin", "dependencies": {"react": "^18.2.0"}},
            "packages/ui": {
                "name": "@acme/ui",
                "version": "0.3.0",
                "peerDependencies": {"react": "^17.0.0"},
                "devDependencies": {"typescript": "~5.2.0", "lodash": "^4.17.21"},
            },
        }
    )


class FakePrompter:
    """Prompter answering from a script of VersionChoices."""

    def __init__(self, choices: Optional[List[VersionChoice]] = None, confirm_answer: bool = True):
        self.choices = list(choices or [])
        self.confirm_answer = confirm_answer
        self.prompts: List[VersionPrompt] = []

    def choose_version(self, prompt: VersionPrompt) -> VersionChoice:
        self.prompts.append(prompt)
        return self.choices.pop(0)

    def confirm(self, message: str, default: bool = False) -> bool:
        return self.confirm_answer


class FakeRegistry:
    """Registry answering from a fixed mapping."""

    def __init__(self, versions: Optional[Dict[str, str]] = None):
        self.versions = versions or {}
        self.queries: List[str] = []

    def latest_version(self, package_name: str) -> Optional[str]:
        self.queries.append(package_name)
        return self.versions.get(package_name)


@pytest.fixture
def fake_prompter():
    return FakePrompter


@pytest.fixture
def fake_registry():
    return FakeRegistry


@pytest.fixture
def completed():
    """Build subprocess.CompletedProcess results."""

    def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)

    return _completed
