from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from defsmith.core.config import PublishConfig
from defsmith.core.publisher import Publisher
from defsmith.extensions.define.registry import DefinitionRegistry


class RecordingEmitter:
    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


@pytest.fixture
def registry() -> DefinitionRegistry:
    return DefinitionRegistry()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def publisher(
    tmp_path: Path, registry: DefinitionRegistry, emitter: RecordingEmitter
) -> Publisher:
    config = PublishConfig(root=tmp_path, project="tests")
    return Publisher(config, registry=registry, emitter=emitter)
