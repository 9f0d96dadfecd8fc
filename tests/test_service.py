"""Tests for the running search service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict
from unittest.mock import AsyncMock

import httpx
import pytest

from hovercraft.config import AppConfig
from hovercraft.index.builder import BuilderState
from hovercraft.service import HoverSearchService


class TestHoverSearchService:
    """Test HoverSearchService.run."""

    @pytest.mark.asyncio
    async def test_queries_during_load_are_empty(self, nested_payload: Dict[str, Any]) -> None:
        """A query issued while the payload is in flight gets an empty result."""
        gate = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            await gate.wait()
            return httpx.Response(200, json=nested_payload)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = HoverSearchService(AppConfig(payload_url="http://testserver/hovercraft"), client=client)
            runner = asyncio.create_task(service.run())

            service.requests.send("open")
            early = await service.results.receive()

            gate.set()
            project_ids = await service.project_ids.receive()

            service.requests.send({"query": "open", "projectIds": ["p2"]})
            later = await service.results.receive()

            service.requests.close()
            await runner

        assert early.query == "open"
        assert early.results == []
        assert project_ids == ["p1", "p2"]
        assert [result.hit.text for result in later.results] == ["open socket"]
        assert service.builder.state is BuilderState.READY
        assert service.results.closed

    @pytest.mark.asyncio
    async def test_local_payload(self, payload_file: Path) -> None:
        service = HoverSearchService(AppConfig(payload_path=payload_file))
        runner = asyncio.create_task(service.run())

        project_ids = await service.project_ids.receive()
        service.requests.send({"query": "widgt", "isFuzzyMode": True})
        response = await service.results.receive()
        service.requests.close()
        await runner

        assert project_ids == ["p1", "p2"]
        assert response.results[0].hit.text == "Returns the Widget count"

    @pytest.mark.asyncio
    async def test_failed_load_still_answers(self, tmp_path: Path) -> None:
        """After a load failure every query succeeds with no results."""
        service = HoverSearchService(AppConfig(payload_path=tmp_path / "missing.json"))
        runner = asyncio.create_task(service.run())

        service.requests.send("open")
        response = await service.results.receive()
        service.requests.close()
        await runner

        assert response.results == []
        assert response.error is None
        assert service.builder.state is BuilderState.FAILED

    @pytest.mark.asyncio
    async def test_remote_failure_published_as_error(self, payload_file: Path) -> None:
        """A failed delegated search is reported on the results channel."""
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503))) as client:
            service = HoverSearchService(
                AppConfig(payload_path=payload_file, remote_search_url="http://testserver"),
                client=client,
            )
            response = await service.answer({"query": "open"})

        assert response.query == "open"
        assert response.results == []
        assert "failed" in response.error

    @pytest.mark.asyncio
    async def test_malformed_request(self, payload_file: Path) -> None:
        service = HoverSearchService(AppConfig(payload_path=payload_file))

        response = await service.answer({"isFuzzyMode": True})

        assert response.error == "Malformed search request"
        assert await service.results.receive() is response

    @pytest.mark.asyncio
    async def test_invalid_remote_url_published_as_error(self) -> None:
        """A remote URL httpx cannot parse still produces a response."""
        service = HoverSearchService(AppConfig(payload_path=None, remote_search_url="http://[::1"))
        runner = asyncio.create_task(service.run())

        service.requests.send("open")
        response = await asyncio.wait_for(service.results.receive(), timeout=2)
        service.requests.close()
        await runner

        assert response.query == "open"
        assert response.results == []
        assert "failed" in response.error

    @pytest.mark.asyncio
    async def test_unexpected_error_published(self, payload_file: Path) -> None:
        """Any failure inside a search is reported instead of killing the task."""
        service = HoverSearchService(AppConfig(payload_path=payload_file))
        service.router.route = AsyncMock(side_effect=KeyError("boom"))

        response = await service.answer("open")

        assert response.query == "open"
        assert response.error.startswith("Search failed")
        assert await service.results.receive() is response
