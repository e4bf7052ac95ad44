"""Typer application wiring for the defsmith CLI."""

from __future__ import annotations

import typer

from .commands import definitions, publish


app = typer.Typer(
    help="Publish Markdown documents with glossary definitions.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)

app.command("publish")(publish)
app.command("definitions")(definitions)


def main() -> None:
    """Console-script entry point."""
    app(prog_name="defsmith")


__all__ = ["app", "main"]
