"""Pytest configuration and fixtures for schema tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path."""
    package_root_str = str(Path(__file__).parent.parent)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)
    yield


@pytest.fixture
def full_manifest():
    """A package.json document with every modelled field and some extras."""
    return {
        "name": "@acme/web",
        "version": "1.4.0",
        "private": True,
        "scripts": {"build": "vite build"},
        "dependencies": {"react": "^18.2.0", "shared": "workspace:*"},
        "devDependencies": {"typescript": "~5.4.0", "react": "^18.3.0"},
        "peerDependencies": {"react": "^18.0.0"},
    }
