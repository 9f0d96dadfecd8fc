"""The running search core: builder, router and UI channels wired together."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Set

import httpx
from pydantic import ValidationError

from hovercraft.channels import Channel
from hovercraft.config import AppConfig
from hovercraft.index.builder import IndexBuilder
from hovercraft.models import SearchRequest, SearchResponse
from hovercraft.search.backends import RemoteBackend, RemoteSearchError
from hovercraft.search.router import QueryRouter

LOGGER = logging.getLogger(__name__)


class HoverSearchService:
    """Answers ``requests`` on ``results`` and announces ``project_ids`` once loaded.

    Each request is answered in its own task, so responses from remote
    searches may arrive out of order; consumers that care must discard stale
    responses themselves.
    """

    def __init__(self, config: AppConfig, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self.requests: Channel[Any] = Channel("requestSearch")
        self.results: Channel[SearchResponse] = Channel("searchReceiver")
        self.project_ids: Channel[List[str]] = Channel("projectIdsReceiver")
        self.builder = IndexBuilder(config, on_ready=self.project_ids.send, client=client)
        remote = None
        if config.remote_search_url:
            remote = RemoteBackend(config.remote_search_url, client=client, timeout=config.http_timeout)
        self.router = QueryRouter(self.builder, remote=remote, limit=config.result_limit)
        self._pending: Set[asyncio.Task] = set()

    async def run(self) -> None:
        """Load in the background and serve requests until ``requests`` closes."""
        load_task = asyncio.create_task(self.builder.load())
        async for request in self.requests:
            task = asyncio.create_task(self.answer(request))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        await load_task
        if self._pending:
            await asyncio.gather(*self._pending)
        self.results.close()
        self.project_ids.close()

    async def answer(self, request: Any) -> SearchResponse:
        try:
            request = SearchRequest.coerce(request)
        except ValidationError as exc:
            LOGGER.error("Rejected malformed search request: %s", exc)
            response = SearchResponse(query="", error="Malformed search request")
            self.results.send(response)
            return response
        try:
            response = await self.router.route(request)
        except RemoteSearchError as exc:
            LOGGER.error("%s", exc)
            response = SearchResponse(query=request.query, error=str(exc))
        except Exception as exc:
            # The consumer must always get an answer for its request.
            LOGGER.exception("Search for %r failed", request.query)
            response = SearchResponse(query=request.query, error=f"Search failed: {exc}")
        self.results.send(response)
        return response
