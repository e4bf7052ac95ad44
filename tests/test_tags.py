from __future__ import annotations

from defsmith.core.tags import (
    TagOccurrence,
    TagRegistry,
    code_spans,
    fenced_spans,
    indented_code_spans,
    parse_attributes,
)


def _noop(tag: TagOccurrence, context: object) -> None:
    return None


def _registry() -> TagRegistry:
    tags = TagRegistry()
    tags.register("define", _noop)
    tags.register("definition", _noop)
    tags.register("defdepend", _noop, own_line=True, has_body=False)
    return tags


def test_parse_attributes_accepts_both_quote_styles() -> None:
    assert parse_attributes(' link="a b" file=\'x.md\'') == {"link": "a b", "file": "x.md"}
    assert parse_attributes("") == {}


def test_scan_yields_occurrences_in_document_order() -> None:
    source = (
        '<definition name="word">hello</definition>\n'
        'Use <define link="word"/> and <define link="other">inline</define>.'
    )
    found = list(_registry().scan(source))

    assert [tag.name for tag in found] == ["definition", "define", "define"]
    definition, first, second = found
    assert definition.attributes == {"name": "word"}
    assert definition.body == "hello"
    assert source[definition.start : definition.end] == '<definition name="word">hello</definition>'
    assert first.body == ""
    assert first.get("link") == "word"
    assert second.body == "inline"
    assert source[second.body_start : second.body_end] == "inline"


def test_body_is_raw_source_substring() -> None:
    source = '<definition name="md">Some *emphasis*\n\nand a [link](x.md)</definition>'
    (tag,) = _registry().scan(source)
    assert tag.body == "Some *emphasis*\n\nand a [link](x.md)"


def test_own_line_tags_require_a_line_of_their_own() -> None:
    source = 'Text <defdepend file="a.md"/> here\n  <defdepend file="b.md"/>  \n'
    found = list(_registry().scan(source))
    assert [tag.get("file") for tag in found] == ["b.md"]


def test_body_less_tags_do_not_consume_following_text() -> None:
    source = '<defdepend file="a.md">\nAfter\n</defdepend>'
    (tag,) = _registry().scan(source)
    assert tag.body == ""
    assert source[tag.end :] == "\nAfter\n</defdepend>"


def test_unregistered_tags_are_ignored() -> None:
    source = '<div class="x">text</div> <defined>nope</defined>'
    assert list(_registry().scan(source)) == []


def test_tags_inside_fenced_code_are_skipped() -> None:
    source = 'before\n```html\n<define link="word"/>\n```\n<define link="after"/>\n'
    found = list(_registry().scan(source))
    assert [tag.get("link") for tag in found] == ["after"]


def test_fenced_spans_handles_unclosed_fences() -> None:
    source = "text\n~~~\ncode\n"
    assert fenced_spans(source) == [(5, len(source))]


def test_tags_inside_inline_code_are_skipped() -> None:
    source = 'Write `<define link="x"/>` or ``<define link="y"/>`` then <define link="z"/>.'
    found = list(_registry().scan(source))
    assert [tag.get("link") for tag in found] == ["z"]


def test_code_spans_do_not_cross_blank_lines() -> None:
    source = 'a stray ` tick\n\n<define link="x"/> and ` another'
    assert code_spans(source) == []
    assert [tag.get("link") for tag in _registry().scan(source)] == ["x"]


def test_tags_inside_indented_code_are_skipped() -> None:
    source = 'Example:\n\n    <define link="x"/>\n\tmore\n\n<define link="y"/>\n'
    assert indented_code_spans(source) == [(10, 39)]
    found = list(_registry().scan(source))
    assert [tag.get("link") for tag in found] == ["y"]


def test_indented_lines_need_a_blank_line_before_them() -> None:
    source = 'A paragraph\n    <define link="x"/>\n'
    assert indented_code_spans(source) == []


def test_indented_list_continuations_are_not_code() -> None:
    source = '- item\n\n    <define link="x"/>\n'
    assert indented_code_spans(source) == []
    assert [tag.get("link") for tag in _registry().scan(source)] == ["x"]


def test_expand_splices_handler_output() -> None:
    tags = TagRegistry()
    tags.register("define", lambda tag, context: f"[{tag.get('link')}]")
    tags.register("definition", _noop)

    expanded = tags.expand(
        'A <define link="x"/> B <definition name="y">gone</definition> C',
        context=None,
        emit=lambda fragment: fragment.upper(),
    )

    assert expanded == "A [X] B  C"


def test_register_replaces_existing_handler() -> None:
    tags = TagRegistry()
    tags.register("define", _noop)
    tags.register("define", lambda tag, context: "new")
    assert tags.names() == ["define"]
    assert tags.expand('<define link="a"/>', context=None) == "new"
