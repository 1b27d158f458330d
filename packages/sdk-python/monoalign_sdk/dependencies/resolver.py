"""
Version Conflict Resolution
===========================

Applies a target version for one package across every workspace currently
declaring a different version, and drives the resolution strategies that
pick that target.

Resolution Rules:
1. A workspace whose on-disk version already equals the target is left alone
2. The bucket to rewrite is the first of dependencies, devDependencies,
   peerDependencies that declares the package
3. Dry runs compute the exact change records a commit would produce
4. No transaction spans workspaces: a failure on one workspace leaves the
   earlier ones written and stops the remaining steps for that package

Strategies:
- interactive: one prompt per conflict with full context and a registry hint
- bulk choice: one quick prompt per conflict
- most common: the version used by the most workspaces
- latest: the registry's latest version, or the literal "latest"
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from monoalign_common import LATEST_TAG, ManifestParseError, ManifestWriteError, MonoalignError, get_logger

from ..capabilities import ChoiceKind, Prompter, RegistryLookup, VersionChoice, VersionPrompt
from ..manifest import find_bucket, manifest_path, read_manifest, write_manifest
from ..results import ChangeAction, ChangeRecord, unique_paths
from .conflicts import Conflict
from .index import VersionMap
from .version import is_version_newer

logger = get_logger(__name__)


class ResolutionStrategy(str, Enum):
    """How a set of conflicts is resolved."""

    INTERACTIVE = "interactive"
    BULK_CHOICE = "bulk"
    MOST_COMMON = "most-common"
    LATEST = "latest"


@dataclass
class ResolutionOutcome:
    """
    What a strategy did.

    Attributes:
        changes: Applied change records, in application order
        affected_paths: Workspaces of every resolved (non-skipped) conflict
        resolved: Package name -> version it was synced to
        skipped: Packages the user chose to skip
    """

    changes: List[ChangeRecord] = field(default_factory=list)
    affected_paths: List[Path] = field(default_factory=list)
    resolved: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    def add(self, conflict: Conflict, version: str, changes: List[ChangeRecord]) -> None:
        self.changes.extend(changes)
        self.resolved[conflict.package_name] = version
        self.affected_paths = unique_paths([*self.affected_paths, *conflict.workspace_paths()])

    def add_partial(self, changes: List[ChangeRecord]) -> None:
        """Record the writes made for a package whose sync did not finish."""
        self.changes.extend(changes)
        self.affected_paths = unique_paths([*self.affected_paths, *(c.path for c in changes)])


class ResolutionAborted(MonoalignError):
    """
    A strategy stopped because a manifest could not be read or written.

    Attributes:
        package_name: Package being synced when the failure happened
        cause: The underlying manifest error
        outcome: Everything applied before the failure, including earlier
            writes for ``package_name`` itself
    """

    def __init__(self, package_name: str, cause: MonoalignError, outcome: ResolutionOutcome):
        super().__init__(f"Resolving '{package_name}' failed: {cause.message}", code=cause.code)
        self.package_name = package_name
        self.cause = cause
        self.outcome = outcome


def sync_to_version(
    package_name: str,
    target_version: str,
    versions: VersionMap,
    dry_run: bool,
) -> List[ChangeRecord]:
    """
    Bring every workspace in ``versions`` to ``target_version``.

    Manifests are re-read from disk, so calling this again with the same
    arguments after a commit yields no change records.

    Args:
        package_name: Package to rewrite
        target_version: Version spec to write
        versions: Version groups from the dependency index
        dry_run: Only compute the change records

    Returns:
        The change records, identical between a dry run and the commit

    Raises:
        ManifestParseError: A target manifest could not be read
        ManifestWriteError: A target manifest could not be written
    """
    changes: List[ChangeRecord] = []
    _sync_into(changes, package_name, target_version, versions, dry_run)
    return changes


def _sync_into(
    changes: List[ChangeRecord],
    package_name: str,
    target_version: str,
    versions: VersionMap,
    dry_run: bool,
) -> None:
    # A record is appended only once its write succeeded, so on failure
    # ``changes`` holds exactly what reached the disk.
    for version, workspaces in versions.items():
        if version == target_version:
            continue

        for workspace in workspaces:
            path = manifest_path(workspace.path)
            data = read_manifest(path)
            bucket = find_bucket(data, package_name)
            if bucket is None:
                logger.warning(
                    "Package no longer declared, skipping",
                    package=package_name,
                    workspace=workspace.name,
                )
                continue

            current = data[bucket][package_name]
            if current == target_version:
                continue

            change = ChangeRecord(
                workspace=workspace.name,
                path=workspace.path,
                bucket=bucket,
                before=current,
                after=target_version,
                action=ChangeAction.UPDATE,
            )

            if not dry_run:
                data[bucket][package_name] = target_version
                write_manifest(path, data)
                logger.info(
                    "Synced dependency",
                    package=package_name,
                    workspace=workspace.name,
                    before=current,
                    after=target_version,
                )
            changes.append(change)


def _usage(versions: VersionMap) -> dict:
    return {version: [w.name for w in workspaces] for version, workspaces in versions.items()}


class ResolutionEngine:
    """
    Runs conflict resolution strategies.

    The engine never talks to the terminal: decisions go through the
    ``prompter`` and registry queries through ``registry``.

    Examples:
        >>> engine = ResolutionEngine(prompter, registry)
        >>> outcome = engine.resolve_most_common(conflicts)
        >>> outcome.affected_paths
    """

    def __init__(self, prompter: Optional[Prompter] = None, registry: Optional[RegistryLookup] = None):
        self.prompter = prompter
        self.registry = registry

    def _latest_or_tag(self, package_name: str) -> str:
        latest = self.registry.latest_version(package_name) if self.registry else None
        return latest or LATEST_TAG

    def _require_prompter(self) -> Prompter:
        if self.prompter is None:
            raise RuntimeError("This strategy needs a prompter")
        return self.prompter

    def _apply(self, outcome: ResolutionOutcome, conflict: Conflict, version: str) -> None:
        changes: List[ChangeRecord] = []
        try:
            _sync_into(changes, conflict.package_name, version, conflict.versions, dry_run=False)
        except (ManifestParseError, ManifestWriteError) as e:
            outcome.add_partial(changes)
            logger.error(
                "Resolution aborted",
                package=conflict.package_name,
                applied=len(outcome.changes),
                error=e.message,
            )
            raise ResolutionAborted(conflict.package_name, e, outcome) from e
        outcome.add(conflict, version, changes)

    def _apply_choice(
        self, outcome: ResolutionOutcome, conflict: Conflict, choice: VersionChoice
    ) -> None:
        if choice.kind is ChoiceKind.SKIP:
            logger.info("Skipped conflict", package=conflict.package_name)
            outcome.skipped.append(conflict.package_name)
            return

        if choice.kind is ChoiceKind.LATEST:
            version = choice.version or self._latest_or_tag(conflict.package_name)
        else:
            version = choice.version
        if not version:
            raise ValueError(f"No version chosen for '{conflict.package_name}'")
        self._apply(outcome, conflict, version)

    def resolve_most_common(self, conflicts: Iterable[Conflict]) -> ResolutionOutcome:
        """Sync every conflict to its most widely used version."""
        outcome = ResolutionOutcome()
        for conflict in conflicts:
            self._apply(outcome, conflict, conflict.most_common_version())
        return outcome

    def resolve_to_latest(self, conflicts: Iterable[Conflict]) -> ResolutionOutcome:
        """Sync every conflict to the registry's latest version."""
        outcome = ResolutionOutcome()
        for conflict in conflicts:
            self._apply(outcome, conflict, self._latest_or_tag(conflict.package_name))
        return outcome

    def resolve_bulk_choice(self, conflicts: Iterable[Conflict]) -> ResolutionOutcome:
        """Ask once per conflict for an in-use version, latest, custom or skip."""
        prompter = self._require_prompter()
        outcome = ResolutionOutcome()
        for conflict in conflicts:
            choice = prompter.choose_version(
                VersionPrompt(package_name=conflict.package_name, usage=_usage(conflict.versions))
            )
            self._apply_choice(outcome, conflict, choice)
        return outcome

    def resolve_interactive(self, conflicts: Iterable[Conflict]) -> ResolutionOutcome:
        """
        Resolve conflicts one at a time with full context.

        The registry is queried before each prompt so the latest version can
        be offered directly, flagged by the "is newer" heuristic.
        """
        prompter = self._require_prompter()
        outcome = ResolutionOutcome()
        for conflict in conflicts:
            latest = self.registry.latest_version(conflict.package_name) if self.registry else None
            prompt = VersionPrompt(
                package_name=conflict.package_name,
                usage=_usage(conflict.versions),
                latest_version=latest,
                latest_is_newer=is_version_newer(latest, conflict.versions) if latest else False,
                detailed=True,
            )
            choice = prompter.choose_version(prompt)
            if choice.kind is ChoiceKind.LATEST and latest:
                choice = VersionChoice(ChoiceKind.LATEST, latest)
            self._apply_choice(outcome, conflict, choice)
        return outcome

    def resolve(self, conflicts: Iterable[Conflict], strategy: ResolutionStrategy) -> ResolutionOutcome:
        """Dispatch to the strategy."""
        strategy = ResolutionStrategy(strategy)
        conflicts = list(conflicts)
        logger.info("Resolving conflicts", strategy=strategy.value, count=len(conflicts))
        if strategy is ResolutionStrategy.MOST_COMMON:
            return self.resolve_most_common(conflicts)
        if strategy is ResolutionStrategy.LATEST:
            return self.resolve_to_latest(conflicts)
        if strategy is ResolutionStrategy.BULK_CHOICE:
            return self.resolve_bulk_choice(conflicts)
        return self.resolve_interactive(conflicts)
