"""Runtime settings for hot-update, merged from defaults, TOML and environment."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from .registry import DEFAULT_LOOKUP_TIMEOUT, DEFAULT_REGISTRY

CONFIG_FILE_NAME = "hot-update.toml"
CONFIG_SECTION = "hot_update"


def _default_cache_folder() -> Path:
    return Path.home() / ".cache" / "hot-update"


@dataclass(frozen=True)
class HotUpdateSettings:
    registry: str = DEFAULT_REGISTRY
    cache_folder: Path = _default_cache_folder()
    target_folder: Path = Path(".")
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    npm_executable: str = "npm"
    silent: bool = True

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> "HotUpdateSettings":
        """Defaults, then the ``[hot_update]`` TOML table, then ``HUP_*`` environment variables."""
        settings = cls()
        path = config_path if config_path is not None else Path.cwd() / CONFIG_FILE_NAME
        settings = settings.merge(_load_config_section(path, required=config_path is not None))
        return settings.merge(_from_env(os.environ if env is None else env))

    def merge(self, overrides: Mapping[str, Any]) -> "HotUpdateSettings":
        values: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None or value == "":
                continue
            if key == "registry":
                values[key] = str(value).rstrip("/")
            elif key in ("cache_folder", "target_folder"):
                values[key] = Path(str(value)).expanduser()
            elif key == "lookup_timeout":
                values[key] = float(value)
            elif key == "npm_executable":
                values[key] = str(value)
            elif key == "silent":
                values[key] = _as_bool(value)
        return replace(self, **values)


def _load_config_section(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise FileNotFoundError(str(path))
        return {}
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid config file {path}: {exc}") from exc
    section = payload.get(CONFIG_SECTION)
    return section if isinstance(section, dict) else {}


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "registry": env.get("HUP_REGISTRY"),
        "cache_folder": env.get("HUP_CACHE_DIR"),
        "target_folder": env.get("HUP_TARGET_DIR"),
        "lookup_timeout": env.get("HUP_LOOKUP_TIMEOUT"),
        "npm_executable": env.get("HUP_NPM"),
        "silent": env.get("HUP_SILENT"),
    }


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
