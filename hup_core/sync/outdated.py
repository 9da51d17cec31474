"""Decide whether the installed copy of a package needs reconciling."""

from __future__ import annotations

import logging
from typing import Protocol

from .manifest import MANIFEST_FILE, read_manifest
from .models import PackageLocation

logger = logging.getLogger(__name__)


class VersionLookup(Protocol):
    def latest_version(self, package_name: str) -> str | None: ...


def installed_version(location: PackageLocation) -> str | None:
    manifest_path = location.target_package_folder / MANIFEST_FILE
    if not manifest_path.is_file():
        return None
    version = read_manifest(manifest_path).get("version")
    return str(version) if version is not None else ""


def is_package_outdated(location: PackageLocation, lookup: VersionLookup) -> bool:
    """
    True when the package was never installed or the registry publishes another version.

    A failed or timed-out lookup counts as up to date, so registry hiccups
    never trigger a reinstall.
    """
    current = installed_version(location)
    if current is None:
        logger.info("%s is not installed under %s", location.package_name, location.target_folder)
        return True

    latest = lookup.latest_version(location.package_name)
    if latest is None:
        logger.info("latest version of %s unknown; keeping %s", location.package_name, current)
        return False
    if current != latest:
        logger.info("%s is outdated: current=%s latest=%s", location.package_name, current, latest)
        return True
    return False
