"""Emitter printing publisher diagnostics on the CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from defsmith.core.diagnostics import format_event_message

from .state import CLIState, emit_warning, get_cli_state


class CliEmitter:
    """Warnings go to stderr; events are logged to stdout with ``-v``."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    def warning(self, message: str) -> None:
        emit_warning(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        if self._state.verbosity >= 1:
            self._state.console.log(format_event_message(name, payload))


__all__ = ["CliEmitter"]
