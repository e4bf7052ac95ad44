"""Process-wide registry of glossary definitions, keyed by project."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock


@dataclass(slots=True)
class DefinitionRegistry:
    """Thread-safe container mapping project ids to ``name -> text`` tables."""

    _projects: dict[str, dict[str, str]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def _table(self, project: str) -> dict[str, str]:
        table = self._projects.get(project)
        if table is None:
            table = {}
            self._projects[project] = table
        return table

    def get_or_create(self, project: str) -> dict[str, str]:
        """Return the live definition table for ``project``, creating it once."""
        with self._lock:
            return self._table(project)

    def set(self, project: str, name: str, text: str) -> None:
        """Store ``text`` under ``name``, replacing any previous definition."""
        with self._lock:
            self._table(project)[name] = text

    def get(self, project: str, name: str) -> str | None:
        """Return the definition text, or ``None`` when the name is unknown."""
        with self._lock:
            table = self._projects.get(project)
            if table is None:
                return None
            return table.get(name)

    def clear(self, project: str) -> None:
        """Forget every definition recorded for ``project``."""
        with self._lock:
            self._projects.pop(project, None)

    def clear_all(self) -> None:
        with self._lock:
            self._projects.clear()

    def projects(self) -> list[str]:
        """Return the identifiers of projects holding a table."""
        with self._lock:
            return sorted(self._projects)

    def snapshot(self, project: str) -> dict[str, str]:
        """Return a shallow copy of the project's definitions."""
        with self._lock:
            return dict(self._projects.get(project, {}))

    def __contains__(self, project: object) -> bool:  # pragma: no cover - trivial
        with self._lock:
            return project in self._projects


_REGISTRY = DefinitionRegistry()


def get_registry() -> DefinitionRegistry:
    """Return the process-wide definition registry."""
    return _REGISTRY


def clear_registry(project: str | None = None) -> None:
    """Wipe one project's definitions, or every project when ``project`` is None."""
    if project is None:
        _REGISTRY.clear_all()
    else:
        _REGISTRY.clear(project)


__all__ = ["DefinitionRegistry", "clear_registry", "get_registry"]
