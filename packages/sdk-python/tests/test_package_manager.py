"""Tests for package manager detection and installs."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from monoalign_sdk import SubprocessInstaller, detect_package_manager, install_packages, manual_install_instructions
from monoalign_sdk.utils import group_install_targets, install_command


@pytest.fixture
def plain_repo(make_monorepo):
    """No workspaces field at the root: installs run per directory."""
    return make_monorepo(
        {
            ".": {"name": "root"},
            "apps/a": {"name": "a"},
            "apps/b": {"name": "b"},
        }
    )


class TestDetection:
    @pytest.mark.parametrize(
        "lockfile,manager",
        [
            ("pnpm-lock.yaml", "pnpm"),
            ("yarn.lock", "yarn"),
            ("bun.lockb", "bun"),
            ("bun.lock", "bun"),
        ],
    )
    def test_lockfiles(self, tmp_path, lockfile, manager):
        (tmp_path / lockfile).touch()
        assert detect_package_manager(tmp_path) == manager

    def test_default_npm(self, tmp_path):
        assert detect_package_manager(tmp_path) == "npm"

    def test_pnpm_before_yarn(self, tmp_path):
        (tmp_path / "yarn.lock").touch()
        (tmp_path / "pnpm-lock.yaml").touch()
        assert detect_package_manager(tmp_path) == "pnpm"

    def test_commands(self):
        assert install_command("yarn") == ["yarn"]
        assert install_command("pnpm") == ["pnpm", "install"]
        assert install_command("npm") == ["npm", "install"]


class TestGrouping:
    def test_single_group_with_workspaces(self, scenario_repo):
        paths = [scenario_repo / "apps/a", scenario_repo / "packages/b"]
        groups = group_install_targets(paths, scenario_repo)
        assert len(groups) == 1
        assert groups[0].path == scenario_repo
        assert groups[0].workspaces == paths

    def test_empty_workspaces_list_counts(self, make_monorepo):
        root = make_monorepo({".": {"workspaces": []}, "apps/a": {}})
        assert len(group_install_targets([root / "apps/a"], root)) == 1

    def test_per_directory_without_workspaces(self, plain_repo):
        paths = [plain_repo / "apps/a", plain_repo / "apps/b", plain_repo / "apps/a"]
        groups = group_install_targets(paths, plain_repo)
        assert [g.path for g in groups] == [plain_repo / "apps/a", plain_repo / "apps/b"]

    def test_unreadable_root_manifest(self, tmp_path):
        (tmp_path / "package.json").write_text("{oops")
        groups = group_install_targets([tmp_path / "apps/a"], tmp_path)
        assert [g.path for g in groups] == [tmp_path / "apps/a"]


class TestInstallPackages:
    """Running the package manager"""

    def test_success(self, scenario_repo, completed):
        (scenario_repo / "pnpm-lock.yaml").touch()
        runner = MagicMock(return_value=completed(0))
        report = install_packages([scenario_repo / "apps/a"], scenario_repo, timeout=30, runner=runner)

        assert report.ok
        assert report.manager == "pnpm"
        assert report.succeeded == [scenario_repo]
        runner.assert_called_once_with(
            ["pnpm", "install"], cwd=str(scenario_repo), capture_output=True, text=True, timeout=30
        )

    def test_failure_does_not_stop_others(self, plain_repo, completed):
        runner = MagicMock(side_effect=[completed(1, stderr="npm ERR! 404\n"), completed(0)])
        report = install_packages([plain_repo / "apps/a", plain_repo / "apps/b"], plain_repo, runner=runner)

        assert not report.ok
        assert report.failed == {plain_repo / "apps/a": "npm ERR! 404"}
        assert report.succeeded == [plain_repo / "apps/b"]
        assert runner.call_count == 2

    def test_exit_code_without_stderr(self, plain_repo, completed):
        runner = MagicMock(return_value=completed(2))
        report = install_packages([plain_repo / "apps/a"], plain_repo, runner=runner)
        assert report.failed[plain_repo / "apps/a"] == "exit code 2"

    def test_timeout(self, plain_repo):
        runner = MagicMock(side_effect=subprocess.TimeoutExpired(["npm", "install"], 5))
        report = install_packages([plain_repo / "apps/a"], plain_repo, timeout=5, runner=runner)
        assert report.failed[plain_repo / "apps/a"] == "timed out after 5s"

    def test_missing_binary(self, plain_repo):
        runner = MagicMock(side_effect=FileNotFoundError("bun"))
        report = install_packages([plain_repo / "apps/a"], plain_repo, runner=runner, manager="bun")
        assert report.failed[plain_repo / "apps/a"] == "'bun' is not installed"

    def test_installer_capability(self, plain_repo, completed):
        runner = MagicMock(return_value=completed(0))
        installer = SubprocessInstaller(plain_repo, timeout=12, runner=runner)
        report = installer([plain_repo / "apps/b"])
        assert report.succeeded == [plain_repo / "apps/b"]
        assert runner.call_args.kwargs["timeout"] == 12


class TestManualInstructions:
    def test_per_directory(self, plain_repo):
        (plain_repo / "yarn.lock").touch()
        instructions = manual_install_instructions([plain_repo / "apps/a"], plain_repo)
        assert instructions == [(str(Path("apps/a")), "yarn")]

    def test_root_group(self, scenario_repo):
        instructions = manual_install_instructions([scenario_repo / "apps/a"], scenario_repo, manager="npm")
        assert instructions == [(".", "npm install")]
