"""CLI command implementations exposed via `defsmith.ui.cli`."""

from __future__ import annotations

from .definitions import definitions
from .publish import publish


__all__ = ["definitions", "publish"]
