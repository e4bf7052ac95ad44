"""Glossary annotations for Markdown publishing.

Mark a term with ``<define link="term">``, give its canonical text with
``<definition name="term">...</definition>``, and pull definitions from
another document with ``<defdepend file="other.md"/>``.
"""

from __future__ import annotations

from .core.config import PublishConfig, discover_config, load_config
from .core.exceptions import ConfigurationError, DefsmithError, IncludeError
from .core.publisher import Publisher
from .extensions.define import (
    DefinitionRegistry,
    DefinitionsExtension,
    clear_registry,
    get_registry,
)


__version__ = "0.1.0"


def clear_definitions(project: str) -> None:
    """Reset the definitions recorded for ``project`` in the shared registry."""
    clear_registry(project)


__all__ = [
    "ConfigurationError",
    "DefinitionRegistry",
    "DefinitionsExtension",
    "DefsmithError",
    "IncludeError",
    "PublishConfig",
    "Publisher",
    "__version__",
    "clear_definitions",
    "clear_registry",
    "discover_config",
    "get_registry",
    "load_config",
]
