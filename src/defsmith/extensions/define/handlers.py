"""Tag handlers implementing ``<definition>``, ``<defdepend>`` and ``<define>``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from defsmith.core.tags import TagOccurrence, TagRegistry


if TYPE_CHECKING:  # pragma: no cover - typing only
    from defsmith.core.publisher import Publisher


def discard_region(processed: str) -> str:
    """Region renderer dropping already-processed output."""
    del processed
    return ""


def _where(publisher: Publisher) -> str:
    document = publisher.current_document
    return str(document) if document is not None else "<string>"


def record_definition(tag: TagOccurrence, publisher: Publisher) -> None:
    """Store the raw body of ``<definition name="...">`` in the project registry."""
    name = tag.get("name")
    if not name:
        publisher.emitter.warning(f"Ignoring <definition> without a name in {_where(publisher)}.")
        return None
    publisher.registry.set(publisher.project, name, tag.body)
    return None


def force_dependency(tag: TagOccurrence, publisher: Publisher) -> None:
    """Process the file named by ``<defdepend file="...">`` and drop its output.

    Publishing the dependency runs its ``<definition>`` tags, so the registry
    holds its definitions before the rest of the current document is handled.
    """
    file_value = tag.get("file")
    if not file_value:
        publisher.emitter.warning(f"Ignoring <defdepend> without a file in {_where(publisher)}.")
        return None

    target = publisher.resolve_path(file_value)
    if target == publisher.current_document:
        return None

    publisher.include(target, render=discard_region)
    publisher.emitter.event("dependency_forced", {"path": str(target)})
    return None


def resolve_reference(tag: TagOccurrence, publisher: Publisher) -> str | None:
    """Render ``<define link="...">`` as a label plus a hidden definition block.

    Inline body text wins over the registry. When neither is available the
    occurrence renders nothing and a warning is reported.
    """
    link = tag.get("link")
    if not link:
        publisher.emitter.warning(f"Ignoring <define> without a link in {_where(publisher)}.")
        return None

    if tag.body:
        text: str | None = tag.body
    else:
        text = publisher.registry.get(publisher.project, link)

    if text is None:
        publisher.report_missing(link)
        return None

    return publisher.formatter.define(link, text)


def discard_reference(tag: TagOccurrence, publisher: Publisher) -> None:
    """Drop ``<define>`` occurrences for formats without annotations."""
    del tag, publisher
    return None


def register_handlers(tags: TagRegistry, *, output_format: str = "html") -> TagRegistry:
    """Register the glossary tags on ``tags``."""
    tags.register("definition", record_definition)
    tags.register("defdepend", force_dependency, own_line=True, has_body=False)
    if output_format == "html":
        tags.register("define", resolve_reference)
    else:
        tags.register("define", discard_reference)
    return tags


__all__ = [
    "discard_reference",
    "discard_region",
    "force_dependency",
    "record_definition",
    "register_handlers",
    "resolve_reference",
]
