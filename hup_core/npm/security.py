"""Credential redaction for npm commands written to logs."""

from __future__ import annotations

from urllib.parse import urlsplit

_SENSITIVE_KEYS = ("password", "_auth", "token", "authorization")


def redact_token(value: str) -> str:
    if not value:
        return value
    if len(value) <= 6:
        return "***"
    return f"{value[:3]}***{value[-2:]}"


def redact_registry_url(url: str) -> str:
    parsed = urlsplit(url)
    if not parsed.username and not parsed.password:
        return url
    host = parsed.hostname or ""
    if parsed.port:
        host = f"{host}:{parsed.port}"
    userinfo = redact_token(parsed.username or "")
    if parsed.password:
        userinfo = f"{userinfo}:***"
    return url.replace(parsed.netloc, f"{userinfo}@{host}", 1)


def redact_command_for_log(command: list[str] | tuple[str, ...]) -> list[str]:
    redacted: list[str] = []
    for item in command:
        name, sep, _ = item.partition("=")
        if sep and any(key in name.lower() for key in _SENSITIVE_KEYS):
            redacted.append(f"{name}=***")
            continue
        if "://" in item:
            redacted.append(redact_registry_url(item))
            continue
        redacted.append(item)
    return redacted
