"""Public CLI exports for defsmith."""

from __future__ import annotations

from .app import app, main
from .diagnostics import CliEmitter


__all__ = ["CliEmitter", "app", "main"]
