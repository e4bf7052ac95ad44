"""Publishing engine driving Markdown conversion with glossary tags.

The publisher owns everything a tag handler needs from its host: the
project identifier, the stack of documents being published, the include
primitive, the definition registry, the HTML formatter and the diagnostics
emitter. Each document is converted by a fresh :class:`markdown.Markdown`
instance so nested includes never share conversion state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
import logging
from pathlib import Path

from markdown import Markdown

from defsmith.adapters.html import HtmlFormatter
from defsmith.extensions.define.handlers import register_handlers
from defsmith.extensions.define.markdown import DefinitionsExtension
from defsmith.extensions.define.registry import DefinitionRegistry, get_registry

from .config import OutputFormat, PublishConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import IncludeError
from .tags import TagOccurrence, TagRegistry


logger = logging.getLogger(__name__)

RegionRenderer = Callable[[str], str]


def insert_region(processed: str) -> str:
    """Region renderer keeping processed output at the include point."""
    return processed


def include_document(tag: TagOccurrence, publisher: Publisher) -> str | None:
    """Insert the processed output of the document named by ``<include file>``."""
    file_value = tag.get("file")
    if not file_value:
        publisher.emitter.warning("Ignoring <include> without a file attribute.")
        return None
    return publisher.include(publisher.resolve_path(file_value)) or None


def build_tag_registry(output_format: OutputFormat = "html") -> TagRegistry:
    """Return a tag registry holding the include tag and the glossary tags."""
    tags = TagRegistry()
    tags.register("include", include_document, own_line=True, has_body=False)
    register_handlers(tags, output_format=output_format)
    return tags


class Publisher:
    """Publish Markdown documents of one project."""

    def __init__(
        self,
        config: PublishConfig | None = None,
        *,
        registry: DefinitionRegistry | None = None,
        emitter: DiagnosticEmitter | None = None,
        formatter: HtmlFormatter | None = None,
        tags: TagRegistry | None = None,
    ) -> None:
        self.config = config or PublishConfig()
        self.registry = registry if registry is not None else get_registry()
        self.emitter = emitter or LoggingEmitter()
        self.formatter = formatter or HtmlFormatter()
        self.tags = tags if tags is not None else build_tag_registry(self.config.output_format)
        self.missing_definitions: list[tuple[str, Path | None]] = []
        self._documents: list[Path] = []

    @property
    def project(self) -> str:
        return self.config.project_id

    @property
    def root(self) -> Path:
        return (self.config.root or Path.cwd()).resolve()

    @property
    def current_document(self) -> Path | None:
        """Absolute path of the innermost document being published."""
        return self._documents[-1] if self._documents else None

    @property
    def definitions(self) -> dict[str, str]:
        """Live definition table of the current project."""
        return self.registry.get_or_create(self.project)

    def clear_definitions(self) -> None:
        """Forget the current project's definitions to force a clean rebuild."""
        logger.debug("Clearing definitions of project %s", self.project)
        self.registry.clear(self.project)

    def resolve_path(self, value: str | Path) -> Path:
        """Resolve ``value`` against the current document's directory."""
        candidate = Path(value).expanduser()
        if not candidate.is_absolute():
            current = self.current_document
            base = current.parent if current is not None else self.root
            candidate = base / candidate
        return candidate.resolve()

    @contextmanager
    def _publishing(self, path: Path) -> Iterator[None]:
        self._documents.append(path)
        try:
            yield
        finally:
            self._documents.pop()

    def create_markdown(self) -> Markdown:
        extensions: list[object] = list(self.config.markdown_extensions)
        extensions.append(DefinitionsExtension(publisher=self))
        return Markdown(extensions=extensions)

    def render(self, text: str, *, source: Path | None = None) -> str:
        """Convert ``text`` to HTML, treating ``source`` as its location."""
        if source is None:
            return self.create_markdown().convert(text)
        with self._publishing(source.resolve()):
            return self.create_markdown().convert(text)

    def publish_file(self, path: str | Path) -> str:
        """Convert one document and return its HTML body."""
        target = Path(path).resolve()
        try:
            text = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise IncludeError(f"Unable to read document '{target}'.") from exc
        logger.debug("Publishing %s (project %s)", target, self.project)
        return self.render(text, source=target)

    def include(self, path: str | Path, render: RegionRenderer = insert_region) -> str:
        """Process another document through the tag pipeline.

        The document's processed output goes through ``render``, whose return
        value is inserted at the include point.
        """
        target = Path(path).resolve()
        if self.config.guard_dependency_cycles and target in self._documents:
            chain = " -> ".join(str(item) for item in [*self._documents, target])
            self.emitter.warning(f"Not including '{target}' again (cycle: {chain}).")
            return ""
        return render(self.publish_file(target))

    def report_missing(self, link: str) -> None:
        """Record and report a ``<define>`` without any definition text."""
        document = self.current_document
        self.missing_definitions.append((link, document))
        where = str(document) if document is not None else "<string>"
        self.emitter.warning(f"Missing definition for '{link}' in {where}.")

    def output_path(self, source: Path, output_dir: Path) -> Path:
        """Return the page location of ``source`` below ``output_dir``.

        Sources outside the project root keep their parent directory name.
        """
        source = source.resolve()
        try:
            relative = source.relative_to(self.root)
        except ValueError:
            relative = Path(source.parent.name, source.name)
        return output_dir / relative.with_suffix(".html")

    def page(self, body: str, *, source: Path | None = None) -> str:
        """Wrap ``body`` into a standalone HTML page."""
        parts = [part for part in (self.config.title, source.stem if source else None) if part]
        return self.formatter.page(body, title=" - ".join(parts))

    def publish(self, paths: Iterable[str | Path], output_dir: Path | None = None) -> list[Path]:
        """Publish ``paths`` in order, writing one HTML page per document."""
        destination = output_dir or self.config.resolve_output_dir()
        written: list[Path] = []
        sources: dict[Path, Path] = {}
        for item in paths:
            source = Path(item).resolve()
            body = self.publish_file(source)
            output = self.output_path(source, destination)
            previous = sources.setdefault(output, source)
            if previous != source:
                self.emitter.warning(
                    f"'{source}' and '{previous}' both publish to '{output}'; "
                    "keeping the last one."
                )
                sources[output] = source
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(self.page(body, source=source), encoding="utf-8")
            self.emitter.event(
                "document_published", {"source": str(source), "output": str(output)}
            )
            written.append(output)
        return written


__all__ = [
    "Publisher",
    "RegionRenderer",
    "build_tag_registry",
    "include_document",
    "insert_region",
]
