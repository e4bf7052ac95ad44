from __future__ import annotations

from pathlib import Path

import pytest

from defsmith.core.config import (
    CONFIG_FILENAME,
    PublishConfig,
    discover_config,
    find_project_root,
    load_config,
)
from defsmith.core.exceptions import ConfigurationError


def test_defaults() -> None:
    config = PublishConfig()
    assert config.project is None
    assert config.project_id == "default"
    assert config.output_format == "html"
    assert config.markdown_extensions == ["extra"]
    assert config.guard_dependency_cycles is True


def test_project_defaults_to_root_name(tmp_path: Path) -> None:
    root = tmp_path / "physics-notes"
    root.mkdir()
    assert PublishConfig(root=root).project_id == "physics-notes"
    assert PublishConfig(root=root, project="explicit").project_id == "explicit"


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError):
        PublishConfig.model_validate({"unexpected": True})


def test_load_config_anchors_root(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        "project: physics\noutput_format: generic\noutput_dir: site\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.project == "physics"
    assert config.output_format == "generic"
    assert config.root == tmp_path.resolve()
    assert config.resolve_output_dir() == tmp_path.resolve() / "site"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_text("", encoding="utf-8")
    config = load_config(path)
    assert config.project == tmp_path.resolve().name
    assert config.resolve_output_dir() == tmp_path.resolve() / "public"


@pytest.mark.parametrize(
    "content",
    [
        "project: [unclosed\n",
        "- just\n- a list\n",
        "output_format: pdf\n",
        "colour: blue\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_discover_config_walks_up(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("project: book\n", encoding="utf-8")
    nested = tmp_path / "part" / "chapter"
    nested.mkdir(parents=True)
    document = nested / "one.md"
    document.write_text("text", encoding="utf-8")

    assert find_project_root(document) == tmp_path.resolve()
    config = discover_config(document)
    assert config.project == "book"
    assert config.root == tmp_path.resolve()


def test_discover_config_without_file(tmp_path: Path) -> None:
    document = tmp_path / "loose.md"
    document.write_text("text", encoding="utf-8")

    config = discover_config(document)

    assert config.root == tmp_path.resolve()
    assert config.project == tmp_path.resolve().name


def test_with_overrides_ignores_none(tmp_path: Path) -> None:
    config = PublishConfig(root=tmp_path, project="base")
    updated = config.with_overrides(project=None, output_format="generic")
    assert updated.project == "base"
    assert updated.output_format == "generic"
    assert config.output_format == "html"
