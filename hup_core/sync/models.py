from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

DependencyMap = dict[str, str | None]

MODULES_DIR = "node_modules"


class DiffKind(str, Enum):
    UPDATE = "update"
    FRESH_INSTALL = "fresh-install"


class ReconcileStatus(str, Enum):
    UP_TO_DATE = "up-to-date"
    SOURCE_MISSING = "source-missing"
    INSTALLED = "installed"
    UPDATED = "updated"


@dataclass(frozen=True)
class DependencySnapshot:
    dependencies: DependencyMap = field(default_factory=dict)
    manifest_found: bool = True


NO_MANIFEST = DependencySnapshot(dependencies={}, manifest_found=False)


@dataclass(frozen=True)
class DependencyDiffResult:
    added: tuple[str, ...]
    removed: tuple[str, ...]
    kind: DiffKind
    unchanged: tuple[str, ...] = ()

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


@dataclass(frozen=True)
class FileTreeDiffResult:
    added: frozenset[str]
    removed: frozenset[str]
    common: frozenset[str]


@dataclass(frozen=True)
class SyncReport:
    copied: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackageLocation:
    """Where the reference copy lives and where the live install lives for one package."""

    cache_folder: Path
    target_folder: Path
    package_name: str

    def __post_init__(self) -> None:
        name = self.package_name.strip()
        parts = PurePosixPath(name).parts
        if not name or ".." in parts or name.startswith("/"):
            raise ValueError(f"invalid package name: {self.package_name!r}")
        object.__setattr__(self, "package_name", name)
        object.__setattr__(self, "cache_folder", Path(self.cache_folder))
        object.__setattr__(self, "target_folder", Path(self.target_folder))

    @property
    def source_modules_folder(self) -> Path:
        return self.cache_folder / MODULES_DIR

    @property
    def source_package_folder(self) -> Path:
        return self.source_modules_folder.joinpath(*self.package_name.split("/"))

    @property
    def target_package_folder(self) -> Path:
        return self.target_folder.joinpath(MODULES_DIR, *self.package_name.split("/"))


@dataclass(frozen=True)
class ReconcilePlan:
    files: FileTreeDiffResult
    dependencies: DependencyDiffResult


@dataclass(frozen=True)
class ReconcileOutcome:
    status: ReconcileStatus
    location: PackageLocation
    dependencies: DependencyDiffResult | None = None
    files: FileTreeDiffResult | None = None
    sync: SyncReport | None = None
