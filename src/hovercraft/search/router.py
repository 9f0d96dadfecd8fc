"""Query routing and result normalization."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from hovercraft.index.generation import IndexGeneration
from hovercraft.models import SearchRequest, SearchResponse
from hovercraft.search.backends import ExactBackend, FuzzyBackend, RemoteBackend, SearchBackend

LOGGER = logging.getLogger(__name__)


class GenerationSource(Protocol):
    generation: IndexGeneration


class QueryRouter:
    """Picks one backend per request and returns its normalized hits.

    Backend order is preserved; the router itself never re-sorts.
    """

    def __init__(
        self,
        source: GenerationSource,
        *,
        remote: Optional[RemoteBackend] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.source = source
        self.remote = remote
        self.limit = limit

    def backend_for(self, request: SearchRequest) -> SearchBackend:
        # Local backends read a single generation snapshot per request.
        generation = self.source.generation
        if request.is_fuzzy_mode:
            return FuzzyBackend(generation, limit=self.limit)
        if self.remote is not None:
            return self.remote
        return ExactBackend(generation, limit=self.limit)

    async def route(self, request: Any) -> SearchResponse:
        request = SearchRequest.coerce(request)
        backend = self.backend_for(request)
        LOGGER.debug(
            "Routing %r to %s (projects=%s)", request.query, type(backend).__name__, request.project_ids
        )
        results = await backend.search(request)
        return SearchResponse(query=request.query, results=results)
