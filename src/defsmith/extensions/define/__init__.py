"""Glossary definitions: ``<define>``, ``<definition>`` and ``<defdepend>`` tags."""

from __future__ import annotations

from .handlers import (
    discard_reference,
    discard_region,
    force_dependency,
    record_definition,
    register_handlers,
    resolve_reference,
)
from .markdown import DefinitionsExtension, makeExtension
from .registry import DefinitionRegistry, clear_registry, get_registry


__all__ = [
    "DefinitionRegistry",
    "DefinitionsExtension",
    "clear_registry",
    "discard_reference",
    "discard_region",
    "force_dependency",
    "get_registry",
    "makeExtension",
    "record_definition",
    "register_handlers",
    "resolve_reference",
]
