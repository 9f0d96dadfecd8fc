"""Core hover documentation models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


@dataclass(slots=True)
class Entry:
    """Hover documentation for one symbol occurrence."""

    hover: Dict[str, Any]
    definition: Dict[str, Any]
    moniker: Any = None
    root_path: str = ""
    project_id: Optional[str] = None
    document: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> Optional[str]:
        """The ``hover.contents.value`` string, or ``None`` when absent."""
        contents = self.hover.get("contents") if isinstance(self.hover, dict) else None
        value = contents.get("value") if isinstance(contents, dict) else None
        return value if isinstance(value, str) else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "hover": self.hover,
            "definition": self.definition,
            "moniker": self.moniker,
            "rootPath": self.root_path,
            "projectId": self.project_id,
        }
        if self.document is not None:
            data["document"] = self.document
        return data


@dataclass(slots=True)
class Page:
    """Entries extracted from one source document."""

    entries: List[Entry] = field(default_factory=list)
    document: Optional[Dict[str, Any]] = None


@dataclass(slots=True)
class Project:
    """All pages of one code-intelligence project.

    ``project_id`` is ``None`` only for flat payloads without a project
    dimension.
    """

    project_id: Optional[str]
    pages: List[Page] = field(default_factory=list)


@dataclass(slots=True)
class IndexedDocument:
    id: int
    contents: Entry


@dataclass(slots=True)
class SearchHit:
    """A normalized search result."""

    hit: Entry
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"hit": self.hit.to_dict(), "score": self.score}


class SearchRequest(BaseModel):
    """A query as sent over the ``requestSearch`` channel."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: str
    is_fuzzy_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_fuzzy_mode", "isFuzzyMode", "isFuzzMode"),
    )
    project_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("project_ids", "projectIds"),
    )
    placeholder: Optional[str] = None

    @classmethod
    def coerce(cls, value: Any) -> "SearchRequest":
        """Build a request from a bare query string or a JSON-like mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(query=value)
        return cls.model_validate(value)


@dataclass(slots=True)
class SearchResponse:
    """Results published on the ``searchReceiver`` channel."""

    query: str
    results: List[SearchHit] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "query": self.query,
            "results": [result.to_dict() for result in self.results],
        }
        if self.error is not None:
            data["error"] = self.error
        return data
