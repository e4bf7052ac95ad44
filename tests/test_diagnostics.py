from __future__ import annotations

import logging
from pathlib import Path

import pytest

from defsmith.core.config import PublishConfig
from defsmith.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from defsmith.core.exceptions import IncludeError, exception_messages
from defsmith.core.publisher import Publisher
from defsmith.extensions.define.registry import DefinitionRegistry


def test_emitters_satisfy_protocol() -> None:
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)
    assert isinstance(NullEmitter(), DiagnosticEmitter)


def test_logging_emitter_reports_missing_definitions(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    publisher = Publisher(
        PublishConfig(root=tmp_path, project="logging"),
        registry=DefinitionRegistry(),
        emitter=LoggingEmitter(),
    )

    with caplog.at_level(logging.WARNING, logger="defsmith"):
        publisher.render('<define link="ghost"/>', source=tmp_path / "doc.md")

    assert any("Missing definition for 'ghost'" in record.message for record in caplog.records)


def test_null_emitter_stays_silent(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    publisher = Publisher(
        PublishConfig(root=tmp_path, project="silent"),
        registry=DefinitionRegistry(),
        emitter=NullEmitter(),
    )

    with caplog.at_level(logging.DEBUG):
        html = publisher.render('<define link="ghost"/>')

    assert "ghost" not in html
    assert [record for record in caplog.records if record.name.startswith("defsmith")] == []
    assert publisher.missing_definitions == [("ghost", None)]


def test_format_event_message() -> None:
    assert (
        format_event_message("document_published", {"source": "a.md", "output": "a.html"})
        == "Published a.md -> a.html"
    )
    assert format_event_message("dependency_forced", {"path": "g.md"}) == (
        "Processed definitions from g.md"
    )
    assert format_event_message("document_published", {"source": "a.md"}) == (
        "Published a.md -> <unknown>"
    )
    assert format_event_message("cache_hit", {"path": "g.md", "age": 3}) == "cache_hit: age=3, path=g.md"
    assert format_event_message("cache_hit", {}) == "cache_hit"


def test_exception_chain_helpers() -> None:
    try:
        try:
            raise FileNotFoundError("no such file: x.md")
        except OSError as exc:
            raise IncludeError("Unable to read document 'x.md'.") from exc
    except IncludeError as error:
        assert exception_messages(error) == [
            "Unable to read document 'x.md'.",
            "no such file: x.md",
        ]


def test_logging_emitter_logs_events_at_info(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="defsmith"):
        LoggingEmitter().event("dependency_forced", {"path": "g.md"})

    assert [(record.levelno, record.message) for record in caplog.records] == [
        (logging.INFO, "Processed definitions from g.md")
    ]
