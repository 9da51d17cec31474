"""Versioned diff of two dependency maps."""

from __future__ import annotations

from .models import DependencyDiffResult, DependencySnapshot, DiffKind


def format_spec(name: str, version: str | None) -> str:
    if version is None:
        return name
    return f"{name}@{version}"


def diff_dependencies(source: DependencySnapshot, target: DependencySnapshot) -> DependencyDiffResult:
    """
    Compare the reference dependencies (``source``) with the installed ones (``target``).

    A version change is reported only as an ``added`` spec carrying the new
    version; the installer overwrites the old copy on install.
    """
    source_map = source.dependencies
    if not target.manifest_found:
        return DependencyDiffResult(
            added=tuple(format_spec(name, version) for name, version in source_map.items()),
            removed=(),
            kind=DiffKind.FRESH_INSTALL,
        )

    target_map = target.dependencies
    added: list[str] = []
    unchanged: list[str] = []
    for name, version in source_map.items():
        if name in target_map and target_map[name] == version:
            unchanged.append(name)
        else:
            added.append(format_spec(name, version))

    removed = [name for name in target_map if name not in source_map]
    return DependencyDiffResult(
        added=tuple(added),
        removed=tuple(removed),
        kind=DiffKind.UPDATE,
        unchanged=tuple(unchanged),
    )
