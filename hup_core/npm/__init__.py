"""npm CLI collaborator for hot-update."""

from .client import NpmClient
from .errors import NpmCommandError, NpmError
from .security import redact_command_for_log, redact_registry_url
from .types import NpmClientConfig

__all__ = [
    "NpmClient",
    "NpmClientConfig",
    "NpmCommandError",
    "NpmError",
    "redact_command_for_log",
    "redact_registry_url",
]
