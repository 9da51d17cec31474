from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from hup_core.npm.security import redact_registry_url

log = logging.getLogger(__name__)

DEFAULT_REGISTRY = "https://registry.npmjs.org"
DEFAULT_LOOKUP_TIMEOUT = 2.0


class RegistryClient:
    """Latest-version lookups against an npm-compatible registry."""

    def __init__(self, base_url: str = DEFAULT_REGISTRY, timeout: float = DEFAULT_LOOKUP_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def latest_version(self, package_name: str) -> str | None:
        """Return the ``latest`` dist-tag version, or None when the registry cannot answer."""
        url = self._url(f"/{quote(package_name, safe='@')}/latest")
        try:
            r = requests.get(url, timeout=self.timeout, headers={"Accept": "application/json"})
        except requests.RequestException as exc:
            log.warning("latest version lookup failed for %s at %s: %s", package_name, redact_registry_url(self.base_url), exc)
            return None
        if r.status_code >= 400:
            log.warning("latest version lookup failed for %s: %s", package_name, r.status_code)
            return None
        try:
            payload = r.json()
        except ValueError:
            log.warning("latest version lookup for %s returned a non-JSON body", package_name)
            return None
        version = payload.get("version") if isinstance(payload, dict) else None
        if not isinstance(version, str) or not version.strip():
            return None
        return version.strip()
