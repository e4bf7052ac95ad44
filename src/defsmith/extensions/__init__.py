"""Markdown extensions bundled with defsmith."""
