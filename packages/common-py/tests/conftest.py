"""Pytest configuration and fixtures for common-py tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import os
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with custom markers and path setup."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path."""
    package_root_str = str(Path(__file__).parent.parent)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)
    yield


@pytest.fixture
def clean_env():
    """Provide an environment without MONOALIGN_* variables, restored afterwards."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("MONOALIGN_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def repo_root(tmp_path):
    """Empty repository root for settings files."""
    return tmp_path


@pytest.fixture
def write_settings(repo_root):
    """Write a .monoalign.yaml into the repository root."""

    def _write(content: str) -> Path:
        path = repo_root / ".monoalign.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
