"""Search backends sharing one ``search(request) -> [SearchHit]`` capability."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Protocol

import httpx

from hovercraft.index.generation import IndexGeneration
from hovercraft.ingestion.payload_loader import PayloadError, parse_entry
from hovercraft.models import Entry, SearchHit, SearchRequest

LOGGER = logging.getLogger(__name__)


class RemoteSearchError(RuntimeError):
    """The delegated search request failed or returned an unusable body."""


class SearchBackend(Protocol):
    async def search(self, request: SearchRequest) -> List[SearchHit]: ...


def in_scope(entry: Entry, project_ids: Iterable[str]) -> bool:
    """Empty scope means every project."""
    scope = set(project_ids)
    return not scope or entry.project_id in scope


class ExactBackend:
    """Exact prefix search; hits carry no graded relevance (score 0)."""

    def __init__(self, generation: IndexGeneration, *, limit: Optional[int] = None) -> None:
        self.generation = generation
        self.limit = limit

    async def search(self, request: SearchRequest) -> List[SearchHit]:
        documents = self.generation.exact.search(request.query, enrich=True)
        hits = [
            SearchHit(hit=document.contents, score=0)
            for document in documents
            if in_scope(document.contents, request.project_ids)
        ]
        return hits[: self.limit] if self.limit is not None else hits


class FuzzyBackend:
    """Approximate search, ordered by the matcher's own policy."""

    def __init__(self, generation: IndexGeneration, *, limit: Optional[int] = None) -> None:
        self.generation = generation
        self.limit = limit

    async def search(self, request: SearchRequest) -> List[SearchHit]:
        matches = self.generation.fuzzy.search(request.query)
        hits = [
            SearchHit(hit=match.item, score=match.score)
            for match in matches
            if in_scope(match.item, request.project_ids)
        ]
        return hits[: self.limit] if self.limit is not None else hits


class RemoteBackend:
    """Delegates exact search to a server exposing ``GET /search``."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client
        self.timeout = timeout

    def build_params(self, request: SearchRequest) -> List[tuple[str, str]]:
        params: List[tuple[str, str]] = [("placeholder", request.placeholder or "")]
        params.extend(("projectIds[]", project_id) for project_id in request.project_ids)
        params.append(("q", request.query))
        return params

    async def search(self, request: SearchRequest) -> List[SearchHit]:
        url = f"{self.base_url}/search"
        params = self.build_params(request)
        try:
            if self.client is not None:
                response = await self.client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise RemoteSearchError(f"Remote search for {request.query!r} failed: {exc}") from exc

        if not isinstance(body, dict) or not isinstance(body.get("results"), list):
            raise RemoteSearchError("Remote search response has no 'results' list")
        if body.get("query") not in (None, request.query):
            LOGGER.debug("Remote search echoed %r for query %r", body["query"], request.query)
        return [parse_remote_result(item) for item in body["results"]]


def parse_remote_result(item: Any) -> SearchHit:
    """Accept ``{hit, score}``, ``{entry, score}`` or ``[entry, score]``."""
    if isinstance(item, dict):
        entry_data = item.get("hit", item.get("entry"))
        score = item.get("score")
    elif isinstance(item, (list, tuple)) and len(item) == 2:
        entry_data, score = item
    else:
        raise RemoteSearchError(f"Unrecognized remote result: {item!r}")

    if not isinstance(score, (int, float)) or isinstance(score, bool):
        raise RemoteSearchError(f"Remote result has a non-numeric score: {score!r}")
    try:
        entry = parse_entry(entry_data, project_id=None)
    except PayloadError as exc:
        raise RemoteSearchError(str(exc)) from exc
    return SearchHit(hit=entry, score=score)
