from __future__ import annotations

import json
from pathlib import Path

import pytest

from hup_core import hot_update
from hup_core.npm import NpmCommandError
from hup_core.sync import ReconcileStatus


class _FailingPackageManager:
    def fetch(self, package_name: str, cache_folder: Path) -> None:
        raise NpmCommandError("npm command failed (exit=1)", returncode=1, stderr="npm ERR! code E404")

    def install(self, package_folder: Path) -> None:
        raise AssertionError("unexpected")

    def add(self, package_folder: Path, specs) -> None:
        raise AssertionError("unexpected")

    def remove(self, package_folder: Path, names) -> None:
        raise AssertionError("unexpected")


class _Lookup:
    def __init__(self, version: str | None) -> None:
        self.version = version

    def latest_version(self, package_name: str) -> str | None:
        return self.version


def test_no_op_run_invokes_callback(tmp_path: Path) -> None:
    installed = tmp_path / "project" / "node_modules" / "demo" / "package.json"
    installed.parent.mkdir(parents=True)
    installed.write_text(json.dumps({"name": "demo", "version": "1.2.3"}), encoding="utf-8")
    called: list[bool] = []

    outcome = hot_update(
        "demo",
        tmp_path / "cache",
        tmp_path / "project",
        "https://registry.local",
        lambda: called.append(True),
        package_manager=_FailingPackageManager(),
        version_lookup=_Lookup("1.2.3"),
    )

    assert outcome.status is ReconcileStatus.UP_TO_DATE
    assert called == [True]


def test_fetch_failure_exits_with_diagnostics(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    called: list[bool] = []

    with pytest.raises(SystemExit) as excinfo:
        hot_update(
            "demo",
            tmp_path / "cache",
            tmp_path / "project",
            "https://registry.local",
            lambda: called.append(True),
            package_manager=_FailingPackageManager(),
            version_lookup=_Lookup("1.0.0"),
        )

    assert excinfo.value.code == 1
    assert called == []
    err = capsys.readouterr().err
    assert "npm ERR! code E404" in err
    assert 'stop running "npm --registry https://registry.local install demo@latest"' in err
