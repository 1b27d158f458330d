"""Tests for the dependency index and conflict detection."""

import pytest

from monoalign_sdk import (
    all_package_names,
    build_dependency_index,
    find_conflicts,
    scan_workspaces,
    select_conflicts,
    sorted_index,
)
from monoalign_sdk.dependencies.index import package_sort_key


def _names(versions):
    return {version: [w.name for w in workspaces] for version, workspaces in versions.items()}


class TestDependencyIndex:
    def test_busy_repo(self, busy_repo):
        index = build_dependency_index(scan_workspaces(busy_repo))
        assert _names(index["react"]) == {"^18.2.0": ["admin", "web"], "^17.0.0": ["@acme/ui"]}
        assert _names(index["lodash"]) == {"^4.17.21": ["web", "@acme/ui"]}
        assert _names(index["typescript"]) == {
            "^5.0.0": ["monorepo"],
            "^5.4.0": ["web"],
            "~5.2.0": ["@acme/ui"],
        }

    def test_workspace_counted_once_per_package(self, make_monorepo):
        root = make_monorepo(
            {
                "packages/ui": {
                    "name": "ui",
                    "dependencies": {"react": "^18.0.0"},
                    "devDependencies": {"react": "^18.1.0"},
                    "peerDependencies": {"react": "^18.2.0"},
                }
            }
        )
        index = build_dependency_index(scan_workspaces(root))
        assert _names(index["react"]) == {"^18.2.0": ["ui"]}

    def test_empty(self, tmp_path):
        assert build_dependency_index(scan_workspaces(tmp_path)) == {}

    def test_sorted_index(self, busy_repo):
        entries = sorted_index(build_dependency_index(scan_workspaces(busy_repo)))
        assert [name for name, _ in entries] == ["lodash", "react", "typescript"]
        assert list(entries[1][1]) == ["^17.0.0", "^18.2.0"]

    def test_all_package_names(self, busy_repo):
        assert all_package_names(scan_workspaces(busy_repo)) == ["lodash", "react", "typescript"]


class TestConflicts:
    """Packages with two or more versions"""

    def test_find_conflicts(self, busy_repo):
        conflicts = find_conflicts(build_dependency_index(scan_workspaces(busy_repo)))
        assert [c.package_name for c in conflicts] == ["react", "typescript"]
        assert conflicts[0].version_count == 2
        assert conflicts[0].workspace_count == 3
        assert conflicts[1].version_count == 3

    def test_scenario(self, scenario_repo):
        conflicts = find_conflicts(build_dependency_index(scan_workspaces(scenario_repo)))
        assert len(conflicts) == 1
        assert conflicts[0].package_name == "dep"
        assert _names(conflicts[0].versions) == {"^1.0.0": ["a"], "^2.0.0": ["b"]}

    def test_single_version_package_absent(self, busy_repo):
        conflicts = find_conflicts(build_dependency_index(scan_workspaces(busy_repo)))
        assert "lodash" not in [c.package_name for c in conflicts]

    def test_most_common_version(self, busy_repo):
        react, typescript = find_conflicts(build_dependency_index(scan_workspaces(busy_repo)))
        assert react.most_common_version() == "^18.2.0"
        # tie: first version encountered
        assert typescript.most_common_version() == "^5.0.0"

    def test_workspace_paths(self, busy_repo):
        react = find_conflicts(build_dependency_index(scan_workspaces(busy_repo)))[0]
        root = busy_repo.resolve()
        assert react.workspace_paths() == [root / "apps/admin", root / "apps/web", root / "packages/ui"]

    def test_select_conflicts(self, busy_repo):
        conflicts = find_conflicts(build_dependency_index(scan_workspaces(busy_repo)))
        assert [c.package_name for c in select_conflicts(conflicts, ["typescript", "vue"])] == ["typescript"]


class TestSortKey:
    @pytest.mark.parametrize(
        "names,expected",
        [
            (["b", "A", "a"], ["a", "A", "b"]),
            (["@types/node", "react", "Zod", "axios"], ["@types/node", "axios", "react", "Zod"]),
        ],
    )
    def test_locale_like_order(self, names, expected):
        assert sorted(names, key=package_sort_key) == expected
