"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer

from defsmith.core.config import PublishConfig, discover_config, load_config
from defsmith.core.publisher import Publisher
from defsmith.extensions.define.registry import DefinitionRegistry

from .diagnostics import CliEmitter


def resolve_config(
    inputs: list[Path],
    *,
    config_path: Path | None = None,
    project: str | None = None,
    output_format: str | None = None,
    output_dir: Path | None = None,
) -> PublishConfig:
    """Load the project configuration and apply command-line overrides."""
    if config_path is not None:
        config = load_config(config_path)
    else:
        start = inputs[0] if inputs else Path.cwd()
        config = discover_config(start)

    try:
        return config.with_overrides(
            project=project,
            output_format=output_format,
            output_dir=output_dir,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def build_publisher(
    config: PublishConfig,
    emitter: CliEmitter,
    *,
    registry: DefinitionRegistry | None = None,
) -> Publisher:
    """Return a publisher; without ``registry`` it shares the process-wide one."""
    return Publisher(config, registry=registry, emitter=emitter)


__all__ = ["build_publisher", "resolve_config"]
