"""Implementation of the ``defsmith publish`` command."""

from __future__ import annotations

from typing import Annotated

import typer

from .._options import (
    OUTPUT_PANEL,
    ConfigOption,
    DebugOption,
    FormatOption,
    InputPathArgument,
    OutputDirOption,
    ProjectOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import configure_cli_state, reporting_errors
from ..utils import build_publisher, resolve_config


def publish(
    inputs: InputPathArgument,
    output_dir: OutputDirOption = None,
    project: ProjectOption = None,
    output_format: FormatOption = None,
    config_path: ConfigOption = None,
    clear_definitions: Annotated[
        bool,
        typer.Option(
            "--clear-definitions",
            help="Forget previously recorded definitions of the project before publishing.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Publish Markdown documents to HTML pages with glossary annotations."""
    state = configure_cli_state(verbosity=verbose, debug=debug)
    with reporting_errors(state):
        config = resolve_config(
            inputs,
            config_path=config_path,
            project=project,
            output_format=output_format,
            output_dir=output_dir,
        )
        publisher = build_publisher(config, CliEmitter(state))
        if clear_definitions:
            publisher.clear_definitions()
        written = publisher.publish(inputs, output_dir=config.resolve_output_dir())

    console = state.console
    for path in written:
        console.print(f"[green]wrote[/] {path}")
    missing = len(publisher.missing_definitions)
    summary = f"Published {len(written)} document(s) for project '{publisher.project}'"
    if missing:
        summary += f", {missing} missing definition(s)"
    console.print(summary + ".")


__all__ = ["publish"]
