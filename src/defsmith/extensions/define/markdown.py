"""Markdown extension expanding glossary tags before block parsing.

Tags are dispatched on the document exactly as it was written, ahead of
Python-Markdown's whitespace normalisation, so recorded definitions keep
their tabs and blank-looking lines. Normalisation strips the control
characters of HTML stash placeholders, which is why each fragment is first
marked with a private token and only turned into a placeholder afterwards.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor


if TYPE_CHECKING:  # pragma: no cover - typing only
    from defsmith.core.publisher import Publisher


_MARKER = "\x1edefsmith:{index}\x1e"
_MARKER_RE = re.compile(r"\x1edefsmith:(\d+)\x1e")


class _DefinitionTagPreprocessor(Preprocessor):
    """Dispatch registered tags on the raw source and stash their output."""

    def __init__(self, md: Markdown, publisher: Publisher) -> None:
        super().__init__(md)
        self.publisher = publisher

    def run(self, lines: list[str]) -> list[str]:
        source = "\n".join(lines)
        expanded = self.publisher.tags.expand(source, self.publisher, emit=self._stash)
        return expanded.split("\n")

    def _stash(self, fragment: str) -> str:
        self.md.htmlStash.store(fragment)
        return _MARKER.format(index=self.md.htmlStash.html_counter - 1)


class _FragmentPlaceholderPreprocessor(Preprocessor):
    """Replace fragment markers with HTML stash placeholders."""

    def run(self, lines: list[str]) -> list[str]:
        return [_MARKER_RE.sub(self._placeholder, line) for line in lines]

    def _placeholder(self, match: re.Match[str]) -> str:
        return self.md.htmlStash.get_placeholder(int(match.group(1)))


class DefinitionsExtension(Extension):
    """Register the glossary tag preprocessors with Python-Markdown."""

    def __init__(self, publisher: Publisher | None = None, **kwargs: Any) -> None:
        self.publisher = publisher
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802 - markdown hook
        if self.publisher is None:
            from defsmith.core.publisher import Publisher

            self.publisher = Publisher()
        md.registerExtension(self)
        # normalize_whitespace runs at 30.
        md.preprocessors.register(
            _DefinitionTagPreprocessor(md, self.publisher),
            "defsmith_definitions",
            priority=35,
        )
        md.preprocessors.register(
            _FragmentPlaceholderPreprocessor(md),
            "defsmith_placeholders",
            priority=27,
        )


def makeExtension(**kwargs: Any) -> DefinitionsExtension:  # noqa: N802 - markdown hook
    """Entry point exposed to Python-Markdown."""
    return DefinitionsExtension(**kwargs)


__all__ = ["DefinitionsExtension", "makeExtension"]
