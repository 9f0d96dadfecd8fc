"""Hover documentation payload parsing.

Three payload shapes are accepted and resolved into one canonical
``Project``/``Page``/``Entry`` representation:

* nested: ``{projectId: {"projectId": ..., "pages": [{"entries": [...]}]}}``
* flat pages: ``{projectId: [{"document": ..., "entries": [...]}]}``
* no project dimension: a top-level list of pages or of bare entries.

Entries always carry the owning project id taken from the outer mapping key,
whether or not the payload repeated it inside the entry.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from hovercraft.models import Entry, Page, Project

LOGGER = logging.getLogger(__name__)


class PayloadError(ValueError):
    """The payload does not match any supported shape."""


def parse_projects(payload: Any) -> List[Project]:
    """Parse a decoded JSON payload into projects, preserving payload order."""
    if isinstance(payload, list):
        return [Project(project_id=None, pages=parse_pages(payload, project_id=None))]
    if not isinstance(payload, Mapping):
        raise PayloadError(f"Expected a mapping or list payload, got {type(payload).__name__}")

    projects: List[Project] = []
    for project_id, value in payload.items():
        if isinstance(value, Mapping) and "pages" in value:
            inner_id = value.get("projectId")
            if inner_id is not None and inner_id != project_id:
                LOGGER.warning(
                    "Project %r declares projectId %r; using the mapping key", project_id, inner_id
                )
            pages = value["pages"]
        elif isinstance(value, list):
            pages = value
        else:
            raise PayloadError(f"Project {project_id!r} has neither a 'pages' key nor a page list")
        projects.append(Project(project_id=project_id, pages=parse_pages(pages, project_id=project_id)))
    return projects


def parse_pages(items: Any, *, project_id: Optional[str]) -> List[Page]:
    if not isinstance(items, list):
        raise PayloadError(f"Expected a list of pages, got {type(items).__name__}")
    if not items:
        return []
    if not any(isinstance(item, Mapping) and "entries" in item for item in items):
        # A bare entry list forms a single anonymous page.
        return [Page(entries=parse_entries(items, project_id=project_id, document=None))]

    pages: List[Page] = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise PayloadError(f"Expected a page object, got {type(item).__name__}")
        if "entries" not in item:
            LOGGER.warning(
                "Skipping page %d of project %r: no 'entries' key", position, project_id
            )
            continue
        pages.append(
            Page(
                entries=parse_entries(item["entries"], project_id=project_id, document=item.get("document")),
                document=item.get("document"),
            )
        )
    return pages


def parse_entries(
    items: Any, *, project_id: Optional[str], document: Optional[Mapping[str, Any]]
) -> List[Entry]:
    if not isinstance(items, list):
        raise PayloadError(f"Expected a list of entries, got {type(items).__name__}")
    return [parse_entry(item, project_id=project_id, document=document) for item in items]


def parse_entry(
    data: Any, *, project_id: Optional[str], document: Optional[Mapping[str, Any]] = None
) -> Entry:
    """Build an ``Entry``; a missing hover text makes it unmatchable, not invalid."""
    if not isinstance(data, Mapping):
        raise PayloadError(f"Expected an entry object, got {type(data).__name__}")
    hover = data.get("hover")
    definition = data.get("definition")
    entry_document = data.get("document", document)
    return Entry(
        hover=dict(hover) if isinstance(hover, Mapping) else {},
        definition=dict(definition) if isinstance(definition, Mapping) else {},
        moniker=data.get("moniker"),
        root_path=data.get("rootPath") or "",
        project_id=project_id if project_id is not None else data.get("projectId"),
        document=dict(entry_document) if isinstance(entry_document, Mapping) else None,
    )


def count_entries(projects: Iterable[Project]) -> int:
    return sum(len(page.entries) for project in projects for page in project.pages)
