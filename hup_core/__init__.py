"""Incremental hot update of an installed npm package from a freshly fetched reference copy."""

from .entrypoint import hot_update
from .errors import HotUpdateError, ManifestParseError, ReferenceManifestError
from .npm import NpmClient, NpmClientConfig, NpmCommandError
from .registry import RegistryClient
from .settings import HotUpdateSettings
from .sync import HotUpdater, PackageLocation, ReconcileOutcome, ReconcileStatus

__all__ = [
    "HotUpdateError",
    "HotUpdateSettings",
    "HotUpdater",
    "ManifestParseError",
    "NpmClient",
    "NpmClientConfig",
    "NpmCommandError",
    "PackageLocation",
    "ReconcileOutcome",
    "ReconcileStatus",
    "ReferenceManifestError",
    "RegistryClient",
    "hot_update",
]

__version__ = "0.1.0"
