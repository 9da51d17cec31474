"""Progress reporting hooks called by the orchestrator at its checkpoints."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def start(self, text: str) -> None: ...

    def succeed(self, text: str) -> None: ...

    def fail(self, text: str) -> None: ...


class LoggingReporter:
    def start(self, text: str) -> None:
        logger.info(text)

    def succeed(self, text: str) -> None:
        logger.info(text)

    def fail(self, text: str) -> None:
        logger.error(text)
