"""Custom exception hierarchy for the publishing pipeline."""

from __future__ import annotations


class DefsmithError(RuntimeError):
    """Base exception for publishing failures."""


class IncludeError(DefsmithError):
    """Raised when an included or forced document cannot be read."""


class ConfigurationError(DefsmithError):
    """Raised when a project configuration file is invalid."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "ConfigurationError",
    "DefsmithError",
    "IncludeError",
    "exception_messages",
]
