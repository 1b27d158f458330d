"""Pytest configuration and fixtures for CLI tests.

Every invocation runs against a monorepo written under tmp_path, with the
npm registry lookup disabled through the environment.
"""
import itertools
import json
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from monoalign_cli.main import app


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
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli(runner):
    """Invoke monoalign against a repository root with the registry disabled."""

    def _invoke(root: Path, *args: str, input: str = None):
        return runner.invoke(
            app,
            ["--root", str(root), *args],
            input=input,
            env={"MONOALIGN_REGISTRY_ENABLED": "false"},
        )

    return _invoke


@pytest.fixture
def make_monorepo(tmp_path):
    counter = itertools.count(1)

    def _make(manifests):
        root = tmp_path / f"repo{next(counter)}"
        root.mkdir()
        for rel, data in manifests.items():
            directory = root / rel
            directory.mkdir(parents=True, exist_ok=True)
            (directory / "package.json").write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def manifest_of():
    def _read(directory: Path) -> dict:
        return json.loads((Path(directory) / "package.json").read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def scenario_repo(make_monorepo):
    """Root without deps, apps/a on dep ^1.0.0, packages/b on dep ^2.0.0 (dev)."""
    return make_monorepo(
        {
            ".": {"name": "root", "version": "1.2.3", "workspaces": ["apps/*", "packages/*"]},
            "apps/a": {"name": "a", "dependencies": {"dep": "^1.0.0"}},
            "packages/b": {"name": "b", "devDependencies": {"dep": "^2.0.0"}},
        }
    )


@pytest.fixture
def aligned_repo(make_monorepo):
    """Every package at one version."""
    return make_monorepo(
        {
            ".": {"name": "root"},
            "apps/web": {"name": "web", "dependencies": {"react": "^18.2.0"}},
            "apps/admin": {"name": "admin", "dependencies": {"react": "^18.2.0"}},
        }
    )


@pytest.fixture
def completed():
    def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)

    return _completed
