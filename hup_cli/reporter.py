from __future__ import annotations

import typer


class ConsoleReporter:
    """Prints orchestrator checkpoints to the terminal."""

    def __init__(self, prefix: str = "[hup]") -> None:
        self.prefix = prefix

    def start(self, text: str) -> None:
        typer.echo(f"{self.prefix} {text}")

    def succeed(self, text: str) -> None:
        typer.secho(f"{self.prefix} {text}", fg=typer.colors.GREEN)

    def fail(self, text: str) -> None:
        typer.secho(f"{self.prefix} {text}", fg=typer.colors.RED, err=True)
