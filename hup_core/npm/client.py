"""npm CLI wrapper used to fetch, install and uninstall packages."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .errors import NpmCommandError
from .security import redact_command_for_log
from .types import NpmClientConfig

logger = logging.getLogger(__name__)


class NpmClient:
    """Blocking npm CLI wrapper. Every call waits for the process to exit and is never retried."""

    def __init__(self, config: NpmClientConfig) -> None:
        self.config = config

    def fetch(self, package_name: str, cache_folder: Path) -> None:
        command = [
            self.config.executable,
            "--registry",
            self.config.registry,
            "install",
            f"{package_name}@latest",
            "--no-optional",
        ]
        self._run(self._quiet(command), cwd=cache_folder)

    def install(self, package_folder: Path) -> None:
        command = [self.config.executable, "install", "--registry", self.config.registry]
        self._run(self._quiet(command), cwd=package_folder)

    def add(self, package_folder: Path, specs: Sequence[str]) -> None:
        if not specs:
            return
        command = [
            self.config.executable,
            "install",
            *specs,
            "--registry",
            self.config.registry,
            "--save",
        ]
        self._run(self._quiet(command), cwd=package_folder)

    def remove(self, package_folder: Path, names: Sequence[str]) -> None:
        if not names:
            return
        command = [self.config.executable, "uninstall", *names, "--save"]
        self._run(command, cwd=package_folder)

    def _quiet(self, command: list[str]) -> list[str]:
        if self.config.silent:
            return [*command, "--silent"]
        return command

    def _run(self, command: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
        redacted = " ".join(redact_command_for_log(command))
        logger.debug("npm command cwd=%s cmd=%s", cwd, redacted)
        try:
            result = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                cwd=str(cwd),
            )
        except FileNotFoundError as exc:
            raise NpmCommandError(
                f"{self.config.executable} CLI not found. Install Node.js/npm and ensure it is available in PATH.",
                command=tuple(command),
            ) from exc
        if result.returncode != 0:
            raise NpmCommandError(
                _format_failure(command, result.returncode, result.stderr),
                command=tuple(command),
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        return result


def _format_failure(command: list[str], code: int, stderr: str | None) -> str:
    redacted = " ".join(redact_command_for_log(command))
    detail = (stderr or "").strip()
    if detail:
        return f"npm command failed (exit={code}) cmd='{redacted}' err='{detail}'"
    return f"npm command failed (exit={code}) cmd='{redacted}'"
