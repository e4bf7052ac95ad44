"""Project configuration for the publisher.

PublishConfig

`project` (`str | None`)
: Identifier of the glossary namespace shared by every document of the
  project. Defaults to the name of the project root directory.

`root` (`Path | None`)
: Project root. Filled in by `discover_config` with the directory holding
  `defsmith.yml`, or the starting directory when no file exists.

`output_format` (`"html" | "generic"`)
: `html` renders `<define>` tags as show/hide annotations, `generic` drops
  them without a trace.

`output_dir` (`Path | None`)
: Destination of published pages. Relative values are resolved against
  `root`; defaults to `<root>/public`.

`markdown_extensions` (`list[str]`)
: Additional Python-Markdown extensions enabled for every document.

`guard_dependency_cycles` (`bool`)
: Refuse to re-enter a document that is already being published through a
  chain of `<defdepend>` or `<include>` tags.

`title` (`str | None`)
: Prefix used for the `<title>` of published pages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
import yaml

from .exceptions import ConfigurationError


CONFIG_FILENAME = "defsmith.yml"

OutputFormat = Literal["html", "generic"]


class PublishConfig(BaseModel):
    """Settings shared by every document of a project."""

    model_config = ConfigDict(extra="forbid")

    project: str | None = None
    root: Path | None = None
    output_format: OutputFormat = "html"
    output_dir: Path | None = None
    markdown_extensions: list[str] = Field(default_factory=lambda: ["extra"])
    guard_dependency_cycles: bool = True
    title: str | None = None

    @model_validator(mode="after")
    def derive_project(self) -> PublishConfig:
        """Name the project after its root directory when no id is given."""
        if self.project is None and self.root is not None:
            self.project = self.root.resolve().name or "default"
        return self

    @property
    def project_id(self) -> str:
        return self.project or "default"

    def resolve_output_dir(self) -> Path:
        """Return the absolute directory receiving published pages."""
        base = (self.root or Path.cwd()).resolve()
        if self.output_dir is None:
            return base / "public"
        if self.output_dir.is_absolute():
            return self.output_dir
        return base / self.output_dir

    def with_overrides(self, **overrides: Any) -> PublishConfig:
        """Return a copy with non-``None`` overrides applied and re-validated."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return PublishConfig.model_validate(data)


def find_project_root(start: Path) -> Path | None:
    """Walk up from ``start`` looking for a directory holding ``defsmith.yml``."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def load_config(path: Path) -> PublishConfig:
    """Load ``path`` and anchor the resulting configuration at its directory."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file '{path}'.") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in configuration file '{path}'.") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file '{path}' must contain a mapping.")

    data = dict(raw)
    root_value = data.get("root")
    base = path.resolve().parent
    data["root"] = (base / root_value).resolve() if root_value else base
    try:
        return PublishConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in '{path}': {exc}") from exc


def discover_config(start: Path) -> PublishConfig:
    """Return the configuration governing ``start``, or defaults rooted there."""
    root = find_project_root(start)
    if root is not None:
        return load_config(root / CONFIG_FILENAME)
    base = start.resolve()
    if base.is_file():
        base = base.parent
    return PublishConfig(root=base)


__all__ = [
    "CONFIG_FILENAME",
    "OutputFormat",
    "PublishConfig",
    "discover_config",
    "find_project_root",
    "load_config",
]
