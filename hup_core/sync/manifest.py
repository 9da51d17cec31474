"""Read package manifests and lock files into normalized dependency maps."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

from hup_core.errors import ManifestParseError

from .models import MODULES_DIR, NO_MANIFEST, DependencyMap, DependencySnapshot

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
LOCK_FILE = "package-lock.json"

DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
    "bundledDependencies",
    "bundleDependencies",
)

_LOCK_PACKAGES_SECTION = "packages"
_LOCK_PACKAGE_PREFIX = f"{MODULES_DIR}/"


def read_manifest(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ManifestParseError(path, "not valid UTF-8") from exc
    if not isinstance(payload, dict):
        raise ManifestParseError(path, "expected a JSON object")
    return payload


def ensure_manifest(path: Path, content: dict[str, Any]) -> bool:
    """Write ``content`` to ``path`` unless a manifest is already there."""
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content, indent=2) + "\n", encoding="utf-8")
    logger.debug("created manifest %s", path)
    return True


def extract_dependencies(manifest_path: Path, lock_path: Path) -> DependencySnapshot:
    """
    Build the ``name -> version`` map of a package.

    The manifest decides which names are dependencies, the lock file decides
    their versions. Names without a lock entry keep the range declared in the
    manifest. Returns ``NO_MANIFEST`` when either file is missing.
    """
    manifest_path = Path(manifest_path)
    lock_path = Path(lock_path)
    if not manifest_path.is_file() or not lock_path.is_file():
        return NO_MANIFEST

    manifest = read_manifest(manifest_path)
    lock = read_manifest(lock_path)

    dependencies: DependencyMap = {}
    for name, declared in _declared_dependencies(manifest):
        if name not in dependencies:
            dependencies[name] = declared

    for name, resolved in _locked_versions(lock):
        if name in dependencies:
            dependencies[name] = resolved

    logger.debug("extracted %d dependencies from %s", len(dependencies), manifest_path)
    return DependencySnapshot(dependencies=dependencies)


def _declared_dependencies(manifest: dict[str, Any]) -> Iterator[tuple[str, str | None]]:
    for section in DEPENDENCY_SECTIONS:
        entries = manifest.get(section)
        if isinstance(entries, dict):
            for name, declared in entries.items():
                yield str(name), (str(declared) if declared is not None else None)
        elif isinstance(entries, list):
            # bundled dependencies are listed by name only
            for name in entries:
                yield str(name), None


def _locked_versions(lock: dict[str, Any]) -> Iterator[tuple[str, str]]:
    for section in DEPENDENCY_SECTIONS:
        entries = lock.get(section)
        if not isinstance(entries, dict):
            continue
        for name, entry in entries.items():
            version = _entry_version(entry)
            if version is not None:
                yield str(name), version

    packages = lock.get(_LOCK_PACKAGES_SECTION)
    if isinstance(packages, dict):
        for key, entry in packages.items():
            if not key.startswith(_LOCK_PACKAGE_PREFIX):
                continue
            name = key[len(_LOCK_PACKAGE_PREFIX) :]
            if f"/{MODULES_DIR}/" in f"/{name}":
                continue
            version = _entry_version(entry)
            if version is not None:
                yield name, version


def _entry_version(entry: Any) -> str | None:
    if isinstance(entry, dict):
        version = entry.get("version")
        if isinstance(version, str) and version:
            return version
    return None
