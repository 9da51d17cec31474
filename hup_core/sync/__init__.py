from .differ import diff_dependencies, format_spec
from .files import MANIFEST_ALIASES, PROTECTED_FILES, sync_package_files
from .manifest import DEPENDENCY_SECTIONS, ensure_manifest, extract_dependencies, read_manifest
from .models import (
    NO_MANIFEST,
    DependencyDiffResult,
    DependencyMap,
    DependencySnapshot,
    DiffKind,
    FileTreeDiffResult,
    PackageLocation,
    ReconcileOutcome,
    ReconcilePlan,
    ReconcileStatus,
    SyncReport,
)
from .orchestrator import HotUpdater, PackageManager, diff_package_dependencies
from .outdated import VersionLookup, installed_version, is_package_outdated
from .reporter import LoggingReporter, ProgressReporter
from .tree import diff_file_trees, list_package_files

__all__ = [
    "DEPENDENCY_SECTIONS",
    "MANIFEST_ALIASES",
    "NO_MANIFEST",
    "PROTECTED_FILES",
    "DependencyDiffResult",
    "DependencyMap",
    "DependencySnapshot",
    "DiffKind",
    "FileTreeDiffResult",
    "HotUpdater",
    "LoggingReporter",
    "PackageLocation",
    "PackageManager",
    "ProgressReporter",
    "ReconcileOutcome",
    "ReconcilePlan",
    "ReconcileStatus",
    "SyncReport",
    "VersionLookup",
    "diff_dependencies",
    "diff_file_trees",
    "diff_package_dependencies",
    "ensure_manifest",
    "extract_dependencies",
    "format_spec",
    "installed_version",
    "is_package_outdated",
    "list_package_files",
    "read_manifest",
    "sync_package_files",
]
