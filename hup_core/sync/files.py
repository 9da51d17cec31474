"""Apply a file-tree diff from the reference package onto the installed package."""

from __future__ import annotations

import filecmp
import logging
import shutil
from pathlib import Path
from typing import Mapping

from .manifest import LOCK_FILE, MANIFEST_FILE
from .models import FileTreeDiffResult, SyncReport

logger = logging.getLogger(__name__)

# Root-level files owned by the installer in the target package.
PROTECTED_FILES: frozenset[str] = frozenset({MANIFEST_FILE, LOCK_FILE})

REFERENCE_MANIFEST_FILE = f".{MANIFEST_FILE}"
REFERENCE_LOCK_FILE = f".{LOCK_FILE}"

# Root-level reference declarations and the canonical name they are installed under.
MANIFEST_ALIASES: Mapping[str, str] = {
    REFERENCE_MANIFEST_FILE: MANIFEST_FILE,
    REFERENCE_LOCK_FILE: LOCK_FILE,
}


def canonical_path(relative_path: str) -> str:
    return MANIFEST_ALIASES.get(relative_path, relative_path)


def is_protected(relative_path: str) -> bool:
    return relative_path in PROTECTED_FILES


def sync_package_files(diff: FileTreeDiffResult, source_root: Path, target_root: Path) -> SyncReport:
    """
    Make the target file set match the source file set.

    Protected manifest files are neither deleted nor overwritten under their
    own name; aliased reference manifests land on the canonical name instead.
    Removals run first so a path that changed between file and folder can be
    recreated. Re-running against an unchanged source copies and deletes nothing.
    """
    source_root = Path(source_root)
    target_root = Path(target_root)
    copied: list[str] = []
    skipped: list[str] = []
    removed: list[str] = []

    for relative in sorted(diff.removed):
        if is_protected(relative):
            continue
        target_file = target_root / relative
        if target_file.is_file() or target_file.is_symlink():
            target_file.unlink()
            logger.debug("removed %s", target_file)
            removed.append(relative)
            _prune_empty_parents(target_file.parent, target_root)

    for relative in sorted(diff.added | diff.common):
        if is_protected(relative):
            continue
        destination_name = canonical_path(relative)
        source_file = source_root / relative
        target_file = target_root / destination_name
        if target_file.is_file() and not target_file.is_symlink() and filecmp.cmp(source_file, target_file, shallow=False):
            skipped.append(destination_name)
            continue
        _clear_destination(target_file, target_root)
        shutil.copyfile(source_file, target_file)
        logger.debug("copied %s -> %s", relative, target_file)
        copied.append(destination_name)

    logger.info(
        "synced %s copied=%d unchanged=%d removed=%d",
        target_root,
        len(copied),
        len(skipped),
        len(removed),
    )
    return SyncReport(copied=tuple(copied), skipped=tuple(skipped), removed=tuple(removed))


def _prune_empty_parents(folder: Path, target_root: Path) -> None:
    while folder != target_root and target_root in folder.parents:
        if folder.is_symlink() or not folder.is_dir() or any(folder.iterdir()):
            return
        folder.rmdir()
        logger.debug("pruned empty folder %s", folder)
        folder = folder.parent


def _clear_destination(target_file: Path, target_root: Path) -> None:
    """Drop whatever occupies the path of ``target_file`` or blocks its parent folders."""
    relative_parts = target_file.relative_to(target_root).parts
    current = target_root
    for part in relative_parts[:-1]:
        current = current / part
        if current.is_symlink() or (current.exists() and not current.is_dir()):
            current.unlink()
            logger.debug("replaced file %s with a folder", current)
    target_file.parent.mkdir(parents=True, exist_ok=True)
    if target_file.is_dir() and not target_file.is_symlink():
        shutil.rmtree(target_file)
        logger.debug("replaced folder %s with a file", target_file)
    elif target_file.is_symlink():
        target_file.unlink()
