from __future__ import annotations

from pathlib import Path

import pytest

from hup_core.settings import HotUpdateSettings


def test_defaults_without_config_or_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = HotUpdateSettings.load(env={})

    assert settings.registry == "https://registry.npmjs.org"
    assert settings.lookup_timeout == 2.0
    assert settings.npm_executable == "npm"
    assert settings.silent is True


def test_toml_then_env_overrides(tmp_path: Path) -> None:
    config = tmp_path / "hot-update.toml"
    config.write_text(
        """[hot_update]
registry = "https://registry.local/"
cache_folder = "/var/cache/hup"
lookup_timeout = 5
silent = false
""",
        encoding="utf-8",
    )

    settings = HotUpdateSettings.load(config, env={"HUP_REGISTRY": "https://mirror.local", "HUP_TARGET_DIR": "/srv/app"})

    assert settings.registry == "https://mirror.local"
    assert settings.cache_folder == Path("/var/cache/hup")
    assert settings.target_folder == Path("/srv/app")
    assert settings.lookup_timeout == 5.0
    assert settings.silent is False


def test_working_directory_config_is_picked_up(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "hot-update.toml").write_text('[hot_update]\nnpm_executable = "pnpm"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert HotUpdateSettings.load(env={}).npm_executable == "pnpm"


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HotUpdateSettings.load(tmp_path / "absent.toml", env={})


def test_invalid_toml_is_an_error(tmp_path: Path) -> None:
    config = tmp_path / "hot-update.toml"
    config.write_text("[hot_update\nregistry = ", encoding="utf-8")

    with pytest.raises(ValueError, match="invalid config file"):
        HotUpdateSettings.load(config, env={})


def test_merge_ignores_unset_values() -> None:
    base = HotUpdateSettings(registry="https://registry.local")

    merged = base.merge({"registry": None, "cache_folder": "", "target_folder": "~/app"})

    assert merged.registry == "https://registry.local"
    assert merged.cache_folder == base.cache_folder
    assert merged.target_folder == Path("~/app").expanduser()


def test_silent_env_switch(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert HotUpdateSettings.load(env={"HUP_SILENT": "0"}).silent is False
    assert HotUpdateSettings.load(env={"HUP_SILENT": "yes"}).silent is True
