"""npm client configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NpmClientConfig:
    registry: str
    executable: str = "npm"
    silent: bool = True
