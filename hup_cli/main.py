from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from hup_core.entrypoint import report_failure
from hup_core.errors import HotUpdateError
from hup_core.npm import NpmClient, NpmClientConfig
from hup_core.registry import RegistryClient
from hup_core.settings import HotUpdateSettings
from hup_core.sync import HotUpdater, PackageLocation, ReconcileStatus, is_package_outdated

from .reporter import ConsoleReporter

app = typer.Typer(help="Hot update an installed npm package from its latest release", no_args_is_help=True)

_CACHE_DIR = typer.Option(None, "--cache-dir", help="Scratch folder the latest release is fetched into")
_TARGET_DIR = typer.Option(None, "--target-dir", help="Project folder holding node_modules/<package>")
_REGISTRY = typer.Option(None, "--registry", help="npm registry URL")
_CONFIG = typer.Option(None, "--config", help="Path to hot-update.toml")
_VERBOSE = typer.Option(False, "--verbose", "-v", help="Debug logging")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _settings(
    config: Optional[Path],
    cache_dir: Optional[Path],
    target_dir: Optional[Path],
    registry: Optional[str],
) -> HotUpdateSettings:
    try:
        settings = HotUpdateSettings.load(config)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")
    return settings.merge({"cache_folder": cache_dir, "target_folder": target_dir, "registry": registry})


def _location(settings: HotUpdateSettings, package: str) -> PackageLocation:
    try:
        return PackageLocation(
            cache_folder=settings.cache_folder.resolve(),
            target_folder=settings.target_folder.resolve(),
            package_name=package,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PACKAGE")


def _updater(settings: HotUpdateSettings) -> HotUpdater:
    return HotUpdater(
        package_manager=NpmClient(
            NpmClientConfig(
                registry=settings.registry,
                executable=settings.npm_executable,
                silent=settings.silent,
            )
        ),
        version_lookup=RegistryClient(settings.registry, timeout=settings.lookup_timeout),
        reporter=ConsoleReporter(),
    )


@app.command("sync")
def sync(
    package: str = typer.Argument(..., help="Package name"),
    cache_dir: Optional[Path] = _CACHE_DIR,
    target_dir: Optional[Path] = _TARGET_DIR,
    registry: Optional[str] = _REGISTRY,
    config: Optional[Path] = _CONFIG,
    verbose: bool = _VERBOSE,
):
    """
    Fetch the latest release of PACKAGE and apply only what changed:
    - files are copied/removed inside node_modules/<package>
    - dependencies are added/removed individually with npm
    """
    _configure_logging(verbose)
    settings = _settings(config, cache_dir, target_dir, registry)
    location = _location(settings, package)
    try:
        outcome = _updater(settings).run(location)
    except HotUpdateError as exc:
        report_failure(exc, package_name=package, registry=settings.registry)
        raise typer.Exit(1)

    if outcome.status is ReconcileStatus.UP_TO_DATE:
        typer.echo(f"[hup:sync] {package} is up to date")
    elif outcome.status is ReconcileStatus.SOURCE_MISSING:
        typer.echo(f"[hup:sync] {package} not found in {location.source_modules_folder}; nothing to do")
    else:
        typer.echo(f"[hup:sync] {package} {outcome.status.value}")
        if outcome.sync is not None:
            typer.echo(
                f"[hup:sync] files copied={len(outcome.sync.copied)} removed={len(outcome.sync.removed)} "
                f"unchanged={len(outcome.sync.skipped)}"
            )
        if outcome.dependencies is not None:
            typer.echo(
                f"[hup:sync] dependencies added={len(outcome.dependencies.added)} "
                f"removed={len(outcome.dependencies.removed)}"
            )


@app.command("check")
def check(
    package: str = typer.Argument(..., help="Package name"),
    target_dir: Optional[Path] = _TARGET_DIR,
    registry: Optional[str] = _REGISTRY,
    config: Optional[Path] = _CONFIG,
    verbose: bool = _VERBOSE,
):
    """Report whether the installed PACKAGE differs from the latest published version."""
    _configure_logging(verbose)
    settings = _settings(config, None, target_dir, registry)
    location = _location(settings, package)
    try:
        outdated = is_package_outdated(location, RegistryClient(settings.registry, timeout=settings.lookup_timeout))
    except HotUpdateError as exc:
        typer.echo(f"[hup:check] error: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(f"[hup:check] {package} {'outdated' if outdated else 'up to date'}")


@app.command("plan")
def plan(
    package: str = typer.Argument(..., help="Package name"),
    cache_dir: Optional[Path] = _CACHE_DIR,
    target_dir: Optional[Path] = _TARGET_DIR,
    config: Optional[Path] = _CONFIG,
    verbose: bool = _VERBOSE,
):
    """Show what `sync` would change using the copy already in the cache folder."""
    _configure_logging(verbose)
    settings = _settings(config, cache_dir, target_dir, None)
    location = _location(settings, package)
    if not location.source_package_folder.is_dir():
        typer.echo(f"[hup:plan] {package} not found in {location.source_modules_folder}; run `hup sync` first", err=True)
        raise typer.Exit(1)
    try:
        result = _updater(settings).plan(location)
    except HotUpdateError as exc:
        typer.echo(f"[hup:plan] error: {exc}", err=True)
        raise typer.Exit(1)

    for path in sorted(result.files.added):
        typer.echo(f"+ {path}")
    for path in sorted(result.files.removed):
        typer.echo(f"- {path}")
    typer.echo(f"[hup:plan] files added={len(result.files.added)} removed={len(result.files.removed)} common={len(result.files.common)}")
    typer.echo(f"[hup:plan] kind={result.dependencies.kind.value}")
    for spec in result.dependencies.added:
        typer.echo(f"[hup:plan] npm install {spec}")
    for name in result.dependencies.removed:
        typer.echo(f"[hup:plan] npm uninstall {name}")


def main(argv: list[str] | None = None) -> int:
    try:
        app(args=argv, prog_name="hup")
    except SystemExit as exc:
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
