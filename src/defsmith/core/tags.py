"""Tag registration and scanning for the publishing markup layer.

Handlers are registered explicitly against a :class:`TagRegistry`. The
registry then scans a document and yields every occurrence of a registered
tag in document order. Markup shown as code is skipped: fenced blocks,
indented blocks and backtick spans. Three shapes are recognised::

    <name attr="value">body</name>
    <name attr="value"/>
    <name attr="value">            (body-less tags, e.g. defdepend)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
import re
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .publisher import Publisher


_ATTRIBUTE_RE = re.compile(
    r"""(?P<key>[A-Za-z_][\w-]*)\s*=\s*(?:"(?P<double>[^"]*)"|'(?P<single>[^']*)')"""
)
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})(.*)$")
_LIST_ITEM_RE = re.compile(r"^\s{0,3}(?:[*+-]|\d+[.)])\s")
_CODE_SPAN_RE = re.compile(r"(?<![\\`])(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)
_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


@dataclass(frozen=True, slots=True)
class TagOccurrence:
    """A single tag found in a source document."""

    name: str
    start: int
    end: int
    body_start: int
    body_end: int
    body: str
    attributes: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)


TagHandler = Callable[[TagOccurrence, "Publisher"], str | None]


@dataclass(frozen=True, slots=True)
class TagSpec:
    """Describe how a tag is recognised and which handler processes it."""

    name: str
    handler: TagHandler
    own_line: bool = False
    has_body: bool = True


class TagRegistry:
    """Ordered collection of tag handlers used by the markup pass."""

    def __init__(self) -> None:
        self._specs: dict[str, TagSpec] = {}
        self._pattern: re.Pattern[str] | None = None

    def register(
        self,
        name: str,
        handler: TagHandler,
        *,
        own_line: bool = False,
        has_body: bool = True,
    ) -> None:
        """Register ``handler`` for ``<name>``, replacing any previous handler."""
        self._specs[name] = TagSpec(name, handler, own_line=own_line, has_body=has_body)
        self._pattern = None

    def get(self, name: str) -> TagSpec | None:
        return self._specs.get(name)

    def names(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._specs)

    def _opening_pattern(self) -> re.Pattern[str]:
        if self._pattern is None:
            # Longest names first so "definition" is not shadowed by "define".
            names = sorted(self._specs, key=len, reverse=True)
            alternatives = "|".join(re.escape(name) for name in names)
            self._pattern = re.compile(
                rf"<(?P<name>{alternatives})(?=[\s/>])(?P<attrs>[^<>]*?)\s*(?P<close>/?)>"
            )
        return self._pattern

    def scan(self, source: str) -> Iterator[TagOccurrence]:
        """Yield registered tag occurrences of ``source`` in document order."""
        if not self._specs:
            return
        pattern = self._opening_pattern()
        skipped = verbatim_spans(source)
        position = 0

        while True:
            match = pattern.search(source, position)
            if match is None:
                return

            if _inside(skipped, match.start()):
                position = match.end()
                continue

            spec = self._specs[match.group("name")]
            if spec.own_line and not _alone_on_line(source, match.start(), match.end()):
                position = match.end()
                continue

            body_start = body_end = end = match.end()
            if spec.has_body and not match.group("close"):
                closing = re.compile(rf"</{re.escape(spec.name)}\s*>").search(source, match.end())
                if closing is not None:
                    body_end = closing.start()
                    end = closing.end()

            yield TagOccurrence(
                name=spec.name,
                start=match.start(),
                end=end,
                body_start=body_start,
                body_end=body_end,
                body=source[body_start:body_end],
                attributes=parse_attributes(match.group("attrs")),
            )
            position = end

    def expand(
        self,
        source: str,
        context: Any,
        *,
        emit: Callable[[str], str] | None = None,
    ) -> str:
        """Run handlers over ``source`` and splice their output into the text.

        Each occurrence is removed from the text. A non-empty handler result is
        passed through ``emit`` (for instance to stash it as literal output)
        before being inserted at the occurrence's position.
        """
        pieces: list[str] = []
        cursor = 0
        for occurrence in self.scan(source):
            pieces.append(source[cursor : occurrence.start])
            spec = self._specs[occurrence.name]
            fragment = spec.handler(occurrence, context)
            if fragment:
                pieces.append(emit(fragment) if emit is not None else fragment)
            cursor = occurrence.end
        pieces.append(source[cursor:])
        return "".join(pieces)


def parse_attributes(raw: str | None) -> dict[str, str]:
    """Parse ``key="value"`` pairs from the inside of an opening tag."""
    if not raw:
        return {}
    attributes: dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(raw):
        value = match.group("double")
        if value is None:
            value = match.group("single") or ""
        attributes[match.group("key")] = value
    return attributes


def fenced_spans(source: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets of fenced code blocks in ``source``."""
    spans: list[tuple[int, int]] = []
    offset = 0
    fence_char: str | None = None
    fence_len = 0
    fence_start = 0

    for line in source.splitlines(keepends=True):
        match = _FENCE_RE.match(line)
        if match:
            token = match.group(1)
            if fence_char is None:
                fence_char = token[0]
                fence_len = len(token)
                fence_start = offset
            elif token[0] == fence_char and len(token) >= fence_len:
                spans.append((fence_start, offset + len(line)))
                fence_char = None
                fence_len = 0
        offset += len(line)

    if fence_char is not None:
        spans.append((fence_start, offset))
    return spans


def indented_code_spans(source: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets of indented code blocks in ``source``.

    A block starts with a line indented by four spaces or a tab that follows
    a blank line, and runs until the next non-blank line that is not
    indented. Indented lines continuing a list item are not code.
    """
    spans: list[tuple[int, int]] = []
    offset = 0
    previous_blank = True
    in_list = False
    block_start: int | None = None
    block_end = 0

    for line in source.splitlines(keepends=True):
        blank = not line.strip()
        indented = line.startswith(("    ", "\t"))
        if block_start is not None:
            if indented and not blank:
                block_end = offset + len(line)
            elif not blank:
                spans.append((block_start, block_end))
                block_start = None
        elif indented and not blank and previous_blank and not in_list:
            block_start = offset
            block_end = offset + len(line)
        if not blank and not indented:
            in_list = _LIST_ITEM_RE.match(line) is not None
        previous_blank = blank
        offset += len(line)

    if block_start is not None:
        spans.append((block_start, block_end))
    return spans


def code_spans(
    source: str, blocks: list[tuple[int, int]] | None = None
) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets of backtick code spans outside ``blocks``.

    A span never crosses a blank line, mirroring paragraph boundaries.
    """
    spans: list[tuple[int, int]] = []
    for segment_start, segment_end in _gaps(blocks or [], len(source)):
        position = segment_start
        while True:
            match = _CODE_SPAN_RE.search(source, position, segment_end)
            if match is None:
                break
            if _BLANK_LINE_RE.search(match.group(2)):
                position = match.start() + len(match.group(1))
                continue
            spans.append(match.span())
            position = match.end()
    return spans


def verbatim_spans(source: str) -> list[tuple[int, int]]:
    """Return every region of ``source`` that Markdown renders as code."""
    blocks = sorted(fenced_spans(source) + indented_code_spans(source))
    return blocks + code_spans(source, blocks)


def _gaps(spans: list[tuple[int, int]], length: int) -> Iterator[tuple[int, int]]:
    cursor = 0
    for start, end in sorted(spans):
        if start > cursor:
            yield cursor, start
        cursor = max(cursor, end)
    if cursor < length:
        yield cursor, length


def _inside(spans: list[tuple[int, int]], position: int) -> bool:
    return any(start <= position < end for start, end in spans)


def _alone_on_line(source: str, start: int, end: int) -> bool:
    line_start = source.rfind("\n", 0, start) + 1
    line_end = source.find("\n", end)
    if line_end == -1:
        line_end = len(source)
    return not source[line_start:start].strip() and not source[end:line_end].strip()


__all__ = [
    "TagHandler",
    "TagOccurrence",
    "TagRegistry",
    "TagSpec",
    "code_spans",
    "fenced_spans",
    "indented_code_spans",
    "parse_attributes",
    "verbatim_spans",
]
