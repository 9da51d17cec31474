from __future__ import annotations

import importlib
import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

import hup_cli.main as cli_mod
from hup_cli import __main__ as cli_entry
from hup_core.npm import NpmCommandError

runner = CliRunner()


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _release(root: Path) -> Path:
    _write_json(root / "package.json", {"name": "demo", "version": "2.0.0"})
    _write_json(root / ".package.json", {"name": "demo", "version": "2.0.0", "dependencies": {"a": "1.0.0"}})
    _write_json(root / ".package-lock.json", {"dependencies": {"a": {"version": "1.0.0"}}})
    (root / "index.js").write_text("module.exports = 2\n", encoding="utf-8")
    return root


def _fake_clients(monkeypatch: pytest.MonkeyPatch, *, latest: str | None, release: Path | None, fail: bool = False):
    calls: list[tuple] = []

    class _FakeNpmClient:
        def __init__(self, config):
            self.config = config

        def fetch(self, package_name: str, cache_folder: Path) -> None:
            calls.append(("fetch", package_name, self.config.registry))
            if fail:
                raise NpmCommandError("npm command failed (exit=1)", returncode=1, stderr="npm ERR! E404")
            if release is not None:
                shutil.copytree(release, cache_folder / "node_modules" / package_name, dirs_exist_ok=True)

        def install(self, package_folder: Path) -> None:
            calls.append(("install", package_folder.name))

        def add(self, package_folder: Path, specs) -> None:
            calls.append(("add", tuple(specs)))

        def remove(self, package_folder: Path, names) -> None:
            calls.append(("remove", tuple(names)))

    class _FakeRegistryClient:
        def __init__(self, base_url: str, timeout: float = 2.0):
            self.base_url = base_url

        def latest_version(self, package_name: str) -> str | None:
            return latest

    monkeypatch.setattr(cli_mod, "NpmClient", _FakeNpmClient)
    monkeypatch.setattr(cli_mod, "RegistryClient", _FakeRegistryClient)
    return calls


def test_console_module_entrypoint_delegates_to_cli_main(monkeypatch: pytest.MonkeyPatch) -> None:
    cli_main = importlib.import_module("hup_cli.main")
    monkeypatch.setattr(cli_main, "main", lambda: 7)

    assert cli_entry.run() == 7
    assert cli_entry.main() == 7


def test_sync_fresh_install(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    calls = _fake_clients(monkeypatch, latest="2.0.0", release=_release(tmp_path / "release"))

    result = runner.invoke(
        cli_mod.app,
        ["sync", "demo", "--cache-dir", str(tmp_path / "cache"), "--target-dir", str(tmp_path / "project"),
         "--registry", "https://registry.local"],
    )

    assert result.exit_code == 0, result.output
    assert "Checking update done! Package is outdated!" in result.output
    assert "demo installed!" in result.output
    assert "[hup:sync] demo installed" in result.output
    assert calls == [("fetch", "demo", "https://registry.local"), ("install", "demo")]
    assert (tmp_path / "project" / "node_modules" / "demo" / "index.js").exists()


def test_sync_up_to_date(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _write_json(tmp_path / "project" / "node_modules" / "demo" / "package.json", {"name": "demo", "version": "2.0.0"})
    calls = _fake_clients(monkeypatch, latest="2.0.0", release=None)

    result = runner.invoke(cli_mod.app, ["sync", "demo", "--target-dir", str(tmp_path / "project")])

    assert result.exit_code == 0, result.output
    assert "[hup:sync] demo is up to date" in result.output
    assert calls == []


def test_sync_fetch_failure_exits_with_one(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _fake_clients(monkeypatch, latest="2.0.0", release=None, fail=True)

    result = runner.invoke(
        cli_mod.app,
        ["sync", "demo", "--cache-dir", str(tmp_path / "cache"), "--target-dir", str(tmp_path / "project"),
         "--registry", "https://registry.local"],
    )

    assert result.exit_code == 1


def test_check_reports_outdated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _write_json(tmp_path / "project" / "node_modules" / "demo" / "package.json", {"name": "demo", "version": "1.0.0"})
    _fake_clients(monkeypatch, latest="2.0.0", release=None)

    result = runner.invoke(cli_mod.app, ["check", "demo", "--target-dir", str(tmp_path / "project")])

    assert result.exit_code == 0, result.output
    assert "[hup:check] demo outdated" in result.output


def test_plan_lists_changes(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _release(tmp_path / "cache" / "node_modules" / "demo")
    target = tmp_path / "project" / "node_modules" / "demo"
    _write_json(target / "package.json", {"name": "demo", "version": "1.0.0", "dependencies": {"old": "1.0.0"}})
    _write_json(target / "package-lock.json", {"dependencies": {"old": {"version": "1.0.0"}}})
    (target / "legacy.js").write_text("", encoding="utf-8")
    calls = _fake_clients(monkeypatch, latest="2.0.0", release=None)

    result = runner.invoke(
        cli_mod.app,
        ["plan", "demo", "--cache-dir", str(tmp_path / "cache"), "--target-dir", str(tmp_path / "project")],
    )

    assert result.exit_code == 0, result.output
    assert "+ index.js" in result.output
    assert "- legacy.js" in result.output
    assert "[hup:plan] npm install a@1.0.0" in result.output
    assert "[hup:plan] npm uninstall old" in result.output
    assert calls == []
    assert (target / "legacy.js").exists()


def test_plan_without_cached_copy_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli_mod.app, ["plan", "demo", "--cache-dir", str(tmp_path / "cache")])

    assert result.exit_code == 1
    assert "run `hup sync` first" in result.output


def test_main_returns_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _fake_clients(monkeypatch, latest=None, release=None)

    assert cli_mod.main(["check", "demo", "--target-dir", str(tmp_path)]) == 0
    assert cli_mod.main(["sync", "demo", "--config", str(tmp_path / "missing.toml")]) == 2
