"""Tests for monoalign error classes."""

from pathlib import Path

import pytest

from monoalign_common import (
    ConfigError,
    InstallError,
    ManifestWriteError,
    MonoalignError,
    OperationCancelled,
    RegistryLookupError,
    ReleaseError,
    ScanError,
    ValidationError,
)


class TestErrors:
    """Test error classes"""

    def test_validation_error(self):
        error = ValidationError("Package name is required")
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "Package name is required"
        assert "Package name is required" in str(error)

    def test_custom_code(self):
        error = MonoalignError("boom", code="CUSTOM")
        assert error.code == "CUSTOM"

    def test_error_to_dict(self):
        error = ConfigError("bad")
        assert error.to_dict() == {"error": "ConfigError", "code": "CONFIG_ERROR", "message": "bad"}

    def test_all_errors_share_base(self):
        for error in (
            ScanError("x"),
            RegistryLookupError("react", "timeout"),
            InstallError("/repo", "exit code 1"),
            ReleaseError("tag", "exists"),
            OperationCancelled(),
        ):
            assert isinstance(error, MonoalignError)


class TestPathErrors:
    """Errors bound to a file"""

    def test_scan_error_includes_path(self):
        error = ScanError("Invalid JSON in package.json", path="apps/web/package.json")
        assert error.code == "SCAN_ERROR"
        assert error.path == Path("apps/web/package.json")
        assert "apps/web/package.json" in error.message

    def test_path_in_dict(self):
        data = ManifestWriteError("Permission denied", path="/repo/package.json").to_dict()
        assert data["code"] == "MANIFEST_WRITE_ERROR"
        assert data["path"] == str(Path("/repo/package.json"))

    def test_without_path(self):
        error = ScanError("broken")
        assert error.path is None
        assert error.message == "broken"
        assert error.to_dict()["path"] is None


class TestContextualErrors:
    """Errors carrying operation details"""

    def test_registry_lookup_error(self):
        error = RegistryLookupError("react", "timed out")
        assert error.package == "react"
        assert error.reason == "timed out"
        assert "react" in error.message

    def test_install_error(self):
        error = InstallError("/repo/apps/web", "exit code 1")
        assert error.directory == Path("/repo/apps/web")
        assert error.code == "INSTALL_ERROR"

    def test_release_error(self):
        error = ReleaseError("push", "rejected")
        assert error.step == "push"
        assert "push" in error.message

    def test_operation_cancelled_default_message(self):
        error = OperationCancelled()
        assert error.code == "CANCELLED"
        assert error.message == "Operation cancelled"

    def test_raise_and_catch_as_base(self):
        with pytest.raises(MonoalignError) as exc_info:
            raise InstallError("/repo", "pnpm not found")
        assert exc_info.value.code == "INSTALL_ERROR"
