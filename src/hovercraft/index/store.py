"""In-memory entry store."""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from hovercraft.models import Entry, Project


class EntryStore:
    """Owns the loaded projects; read-only once constructed."""

    def __init__(self, projects: Sequence[Project] = ()) -> None:
        self._projects: Tuple[Project, ...] = tuple(projects)
        self._size = sum(len(page.entries) for project in self._projects for page in project.pages)

    @property
    def projects(self) -> Tuple[Project, ...]:
        return self._projects

    @property
    def project_ids(self) -> List[str]:
        """Known project ids in payload order; flat payloads contribute none."""
        return [project.project_id for project in self._projects if project.project_id is not None]

    def iter_entries(self) -> Iterator[Entry]:
        for project in self._projects:
            for page in project.pages:
                yield from page.entries

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return bool(self._projects)
