"""Reporting channel between the publisher and whoever drives it.

Tag handlers never print. They hand warnings (missing definitions, ignored
tags, refused cycles) and structured events to a :class:`DiagnosticEmitter`,
which decides where they end up: the logging module, a Rich console, or
nowhere at all.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

EVENT_MESSAGES: dict[str, str] = {
    "document_published": "Published {source} -> {output}",
    "dependency_forced": "Processed definitions from {path}",
}


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver for publishing warnings and events."""

    def warning(self, message: str) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Drop every diagnostic."""

    def warning(self, message: str) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Send warnings and events to a logger, events at ``INFO`` level."""

    def __init__(self, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._logger.info(format_event_message(name, payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str:
    """Describe a publishing event in one line.

    Known events use the sentences of :data:`EVENT_MESSAGES`; any other event
    is rendered as its name followed by the payload items.
    """
    template = EVENT_MESSAGES.get(name)
    if template is None:
        details = ", ".join(f"{key}={value}" for key, value in sorted(payload.items()))
        return f"{name}: {details}" if details else name
    return template.format_map(defaultdict(lambda: "<unknown>", payload))


__all__ = [
    "EVENT_MESSAGES",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
