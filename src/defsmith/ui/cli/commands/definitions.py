"""Implementation of the ``defsmith definitions`` command."""

from __future__ import annotations

from rich import box
from rich.table import Table

from defsmith.extensions.define.registry import DefinitionRegistry

from .._options import ConfigOption, DebugOption, InputPathArgument, ProjectOption, VerboseOption
from ..diagnostics import CliEmitter
from ..state import configure_cli_state, reporting_errors
from ..utils import build_publisher, resolve_config


def _preview(text: str, width: int = 60) -> str:
    flattened = " ".join(text.split())
    if len(flattened) <= width:
        return flattened
    return flattened[: width - 1] + "…"


def definitions(
    inputs: InputPathArgument,
    project: ProjectOption = None,
    config_path: ConfigOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Process documents and list the definitions they record.

    Definitions are collected apart from the project's shared registry,
    which is left untouched.
    """
    state = configure_cli_state(verbosity=verbose, debug=debug)
    with reporting_errors(state):
        config = resolve_config(
            inputs,
            config_path=config_path,
            project=project,
            output_format="generic",
        )
        publisher = build_publisher(config, CliEmitter(state), registry=DefinitionRegistry())
        for path in inputs:
            publisher.publish_file(path)

    table = Table(
        title=f"Definitions of '{publisher.project}'",
        box=box.SQUARE,
        header_style="bold cyan",
    )
    table.add_column("Name", style="magenta")
    table.add_column("Definition")

    entries = publisher.registry.snapshot(publisher.project)
    if not entries:
        table.add_row("-", "No definitions found")
    for name in sorted(entries):
        table.add_row(name, _preview(entries[name]))

    state.console.print(table)


__all__ = ["definitions"]
