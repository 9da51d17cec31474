"""Error hierarchy for hot-update runs."""

from __future__ import annotations

from pathlib import Path


class HotUpdateError(Exception):
    """Base class for failures that abort a reconciliation run."""


class ManifestParseError(HotUpdateError):
    def __init__(self, path: Path, detail: str | None = None) -> None:
        self.path = Path(path)
        self.detail = detail
        message = f"unable to parse manifest '{self.path}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ReferenceManifestError(HotUpdateError):
    """The fetched reference package lacks its aliased manifest/lock pair."""

    def __init__(self, folder: Path, missing: tuple[str, ...]) -> None:
        self.folder = Path(folder)
        self.missing = missing
        super().__init__(f"{', '.join(missing)} needed in reference package '{self.folder}'")
