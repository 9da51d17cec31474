"""Reconcile an installed package with a freshly fetched reference copy."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Protocol, Sequence

from hup_core.errors import ReferenceManifestError

from .differ import diff_dependencies
from .files import REFERENCE_LOCK_FILE, REFERENCE_MANIFEST_FILE, sync_package_files
from .manifest import LOCK_FILE, MANIFEST_FILE, ensure_manifest, extract_dependencies
from .models import (
    DependencyDiffResult,
    DiffKind,
    PackageLocation,
    ReconcileOutcome,
    ReconcilePlan,
    ReconcileStatus,
)
from .outdated import VersionLookup, is_package_outdated
from .reporter import LoggingReporter, ProgressReporter
from .tree import diff_file_trees

logger = logging.getLogger(__name__)

CACHE_MANIFEST_NAME = "hot-update-package-cache"


class PackageManager(Protocol):
    def fetch(self, package_name: str, cache_folder: Path) -> None: ...

    def install(self, package_folder: Path) -> None: ...

    def add(self, package_folder: Path, specs: Sequence[str]) -> None: ...

    def remove(self, package_folder: Path, names: Sequence[str]) -> None: ...


def diff_package_dependencies(location: PackageLocation) -> DependencyDiffResult:
    source_folder = location.source_package_folder
    missing = tuple(
        name for name in (REFERENCE_MANIFEST_FILE, REFERENCE_LOCK_FILE) if not (source_folder / name).is_file()
    )
    if missing:
        raise ReferenceManifestError(source_folder, missing)

    source = extract_dependencies(source_folder / REFERENCE_MANIFEST_FILE, source_folder / REFERENCE_LOCK_FILE)
    target_folder = location.target_package_folder
    target = extract_dependencies(target_folder / MANIFEST_FILE, target_folder / LOCK_FILE)
    return diff_dependencies(source, target)


class HotUpdater:
    """
    Drives one reconciliation run per call to ``run``.

    Steps run strictly in sequence and every package-manager call blocks until
    it finishes. Nothing guards against two runs on the same target folder at
    once; callers must serialize them.
    """

    def __init__(
        self,
        package_manager: PackageManager,
        version_lookup: VersionLookup,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self.package_manager = package_manager
        self.version_lookup = version_lookup
        self.reporter = reporter or LoggingReporter()

    def run(self, location: PackageLocation, callback: Callable[[], None] | None = None) -> ReconcileOutcome:
        self.reporter.start("Checking update...")
        try:
            outdated = is_package_outdated(location, self.version_lookup)
        except Exception:
            self.reporter.fail("Checking update failed!")
            raise
        if outdated:
            self.reporter.succeed("Checking update done! Package is outdated!")
        else:
            self.reporter.succeed("Checking update done!")
            return self._done(ReconcileOutcome(status=ReconcileStatus.UP_TO_DATE, location=location), callback)

        self._ensure_root_manifests(location)
        self.package_manager.fetch(location.package_name, location.cache_folder)

        if not location.source_package_folder.is_dir() or not location.source_modules_folder.is_dir():
            logger.warning("fetched package %s not found under %s", location.package_name, location.cache_folder)
            return self._done(ReconcileOutcome(status=ReconcileStatus.SOURCE_MISSING, location=location), callback)

        outcome = self._patch(location)
        return self._done(outcome, callback)

    def plan(self, location: PackageLocation) -> ReconcilePlan:
        """Compute both diffs against the current cache copy without changing anything."""
        dependencies = diff_package_dependencies(location)
        files = diff_file_trees(location.source_package_folder, location.target_package_folder)
        return ReconcilePlan(files=files, dependencies=dependencies)

    def _patch(self, location: PackageLocation) -> ReconcileOutcome:
        # dependencies are diffed before the file sync rewrites the target manifest
        dependencies = diff_package_dependencies(location)

        target_folder = location.target_package_folder
        target_folder.mkdir(parents=True, exist_ok=True)
        files = diff_file_trees(location.source_package_folder, target_folder)
        report = sync_package_files(files, location.source_package_folder, target_folder)

        if dependencies.kind is DiffKind.FRESH_INSTALL:
            self._step(
                f"installing {location.package_name}...",
                f"{location.package_name} installed!",
                lambda: self.package_manager.install(target_folder),
            )
            status = ReconcileStatus.INSTALLED
        else:
            self._step(
                f"updating {location.package_name}...",
                f"{location.package_name} updated!",
                lambda: self._apply_delta(target_folder, dependencies),
            )
            status = ReconcileStatus.UPDATED

        return ReconcileOutcome(
            status=status,
            location=location,
            dependencies=dependencies,
            files=files,
            sync=report,
        )

    def _apply_delta(self, target_folder: Path, dependencies: DependencyDiffResult) -> None:
        if dependencies.added:
            self.package_manager.add(target_folder, dependencies.added)
        if dependencies.removed:
            self.package_manager.remove(target_folder, dependencies.removed)

    def _step(self, text: str, done_text: str, action: Callable[[], None]) -> None:
        self.reporter.start(text)
        try:
            action()
        except Exception:
            self.reporter.fail(text.rstrip(".") + " failed!")
            raise
        self.reporter.succeed(done_text)

    @staticmethod
    def _ensure_root_manifests(location: PackageLocation) -> None:
        ensure_manifest(
            location.target_folder / MANIFEST_FILE,
            {"name": f"install-{_safe_name(location.package_name)}", "version": "1.0.0"},
        )
        ensure_manifest(
            location.cache_folder / MANIFEST_FILE,
            {"name": CACHE_MANIFEST_NAME, "version": "1.0.0"},
        )

    @staticmethod
    def _done(outcome: ReconcileOutcome, callback: Callable[[], None] | None) -> ReconcileOutcome:
        logger.info("%s: %s", outcome.location.package_name, outcome.status.value)
        if callback is not None:
            callback()
        return outcome


def _safe_name(package_name: str) -> str:
    return re.sub(r"[^a-z0-9._-]+", "-", package_name.lower()).strip("-") or "package"
