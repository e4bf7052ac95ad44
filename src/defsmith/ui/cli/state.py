"""Console and verbosity settings of the running CLI command."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import sys

from rich.console import Console
from rich.text import Text
import typer

from defsmith.core.exceptions import DefsmithError, exception_messages


__all__ = [
    "CLIState",
    "configure_cli_state",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "reporting_errors",
]


@dataclass(slots=True)
class CLIState:
    """Verbosity chosen on the command line."""

    verbosity: int = 0
    show_tracebacks: bool = False

    # Built on access so output follows the current sys.stdout/sys.stderr.
    @property
    def console(self) -> Console:
        return Console(file=sys.stdout)

    @property
    def err_console(self) -> Console:
        return Console(file=sys.stderr, highlight=False)


_STATE_VAR: ContextVar[CLIState] = ContextVar("defsmith_cli_state")


def get_cli_state() -> CLIState:
    try:
        return _STATE_VAR.get()
    except LookupError:
        state = CLIState()
        _STATE_VAR.set(state)
        return state


def configure_cli_state(*, verbosity: int = 0, debug: bool = False) -> CLIState:
    """Install fresh settings for the command being run."""
    state = CLIState(verbosity=max(0, verbosity), show_tracebacks=debug)
    _STATE_VAR.set(state)
    return state


def emit_warning(message: str) -> None:
    text = Text.assemble(("warning: ", "bold yellow"), (message, "yellow"))
    get_cli_state().err_console.print(text)


def emit_error(exc: BaseException) -> None:
    """Print ``exc`` on stderr; with ``-v`` its causes follow, one per line."""
    state = get_cli_state()
    messages = exception_messages(exc) or [type(exc).__name__]
    text = Text.assemble(("error: ", "bold red"), (messages[0], "red"))
    if state.verbosity >= 1:
        for cause in messages[1:]:
            text.append(f"\n  caused by: {cause}", style="red")
    state.err_console.print(text)


@contextmanager
def reporting_errors(state: CLIState) -> Iterator[None]:
    """Turn a :class:`DefsmithError` into an error line and exit status 1."""
    try:
        yield
    except DefsmithError as exc:
        if state.show_tracebacks:
            raise
        emit_error(exc)
        raise typer.Exit(code=1) from exc
