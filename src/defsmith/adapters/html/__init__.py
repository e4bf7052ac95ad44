"""HTML rendering helpers."""

from __future__ import annotations

from .formatter import TEMPLATE_DIR, HtmlFormatter


__all__ = ["TEMPLATE_DIR", "HtmlFormatter"]
