"""File-tree walking and diffing for package folders."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .models import MODULES_DIR, FileTreeDiffResult

logger = logging.getLogger(__name__)

EXCLUDED_DIRS: frozenset[str] = frozenset({MODULES_DIR, ".git"})


def is_excluded(relative_path: str) -> bool:
    return any(part in EXCLUDED_DIRS for part in relative_path.split("/"))


def list_package_files(root: Path) -> list[str]:
    """Return every file under ``root`` as a POSIX path relative to it, minus dependency and VCS subtrees."""
    root = Path(root)
    if not root.is_dir():
        return []
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in EXCLUDED_DIRS]
        base = Path(dirpath)
        for filename in filenames:
            relative = (base / filename).relative_to(root).as_posix()
            if is_excluded(relative) or not (base / filename).is_file():
                continue
            files.append(relative)
    return sorted(files)


def diff_file_trees(source_root: Path, target_root: Path) -> FileTreeDiffResult:
    source_files = set(list_package_files(source_root))
    target_files = set(list_package_files(target_root))
    result = FileTreeDiffResult(
        added=frozenset(source_files - target_files),
        removed=frozenset(target_files - source_files),
        common=frozenset(source_files & target_files),
    )
    logger.debug(
        "file diff %s -> %s added=%d removed=%d common=%d",
        source_root,
        target_root,
        len(result.added),
        len(result.removed),
        len(result.common),
    )
    return result
