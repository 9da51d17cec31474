"""npm collaborator errors."""

from __future__ import annotations

from hup_core.errors import HotUpdateError


class NpmError(HotUpdateError):
    """Base class for npm CLI failures."""


class NpmCommandError(NpmError):
    def __init__(
        self,
        message: str,
        *,
        command: tuple[str, ...] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
