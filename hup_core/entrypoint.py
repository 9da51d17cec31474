"""Library entry point mirroring the command-line exit semantics."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

from .errors import HotUpdateError
from .npm import NpmClient, NpmClientConfig, NpmCommandError
from .npm.security import redact_registry_url
from .registry import DEFAULT_LOOKUP_TIMEOUT, RegistryClient
from .sync import HotUpdater, PackageLocation, PackageManager, ProgressReporter, ReconcileOutcome, VersionLookup

logger = logging.getLogger(__name__)


def hot_update(
    package_name: str,
    cache_folder: Path | str,
    target_folder: Path | str,
    registry: str,
    callback: Callable[[], None] | None = None,
    *,
    reporter: ProgressReporter | None = None,
    package_manager: PackageManager | None = None,
    version_lookup: VersionLookup | None = None,
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT,
) -> ReconcileOutcome:
    """
    Reconcile ``target_folder/node_modules/<package_name>`` with the latest release.

    Any fatal error is reported on stderr and ends the process with exit code 1.
    """
    location = PackageLocation(
        cache_folder=Path(cache_folder),
        target_folder=Path(target_folder),
        package_name=package_name,
    )
    updater = HotUpdater(
        package_manager=package_manager or NpmClient(NpmClientConfig(registry=registry)),
        version_lookup=version_lookup or RegistryClient(registry, timeout=lookup_timeout),
        reporter=reporter,
    )
    try:
        return updater.run(location, callback)
    except HotUpdateError as exc:
        logger.debug("hot update of %s failed", package_name, exc_info=True)
        report_failure(exc, package_name=package_name, registry=registry)
        raise SystemExit(1) from exc


def report_failure(exc: HotUpdateError, *, package_name: str, registry: str) -> None:
    print(f"[hup] error: {exc}", file=sys.stderr)
    if isinstance(exc, NpmCommandError) and exc.stderr.strip():
        print(exc.stderr.rstrip(), file=sys.stderr)
    print(
        f'\nstop running "npm --registry {redact_registry_url(registry)} install {package_name}@latest"\n',
        file=sys.stderr,
    )
