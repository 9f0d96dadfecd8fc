"""Asynchronous payload loading and index building."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx

from hovercraft.config import AppConfig
from hovercraft.index.generation import IndexGeneration
from hovercraft.ingestion.payload_loader import count_entries, parse_projects
from hovercraft.utils.files import read_json

LOGGER = logging.getLogger(__name__)


class BuilderState(str, enum.Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class IndexBuilder:
    """Loads the payload once and publishes a ready index generation.

    Until a load succeeds ``generation`` is empty, so searches made early
    simply return nothing. A failed load is final; retrying is left to the
    caller, who can create a new builder.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        on_ready: Optional[Callable[[List[str]], None]] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_dir: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.on_ready = on_ready
        self.client = client
        self.base_dir = base_dir
        self.state = BuilderState.EMPTY
        self.generation = IndexGeneration()

    @property
    def is_ready(self) -> bool:
        return self.state is BuilderState.READY

    async def load(self) -> BuilderState:
        """Fetch or read the payload and build both indexes."""
        if self.state is not BuilderState.EMPTY:
            LOGGER.debug("Load requested in state %s; ignoring", self.state.value)
            return self.state

        self.state = BuilderState.LOADING
        try:
            if self.config.payload_url:
                payload = await self._fetch(self.config.payload_url)
            else:
                payload = self._read_local()
            self.ingest(payload)
        except (httpx.HTTPError, OSError, ValueError) as exc:
            LOGGER.exception("Failed to load hover documentation: %s", exc)
            self.state = BuilderState.FAILED
        return self.state

    def ingest(self, payload: Any) -> IndexGeneration:
        """Build a generation from a decoded payload and swap it in."""
        projects = parse_projects(payload)
        generation = IndexGeneration.build(
            projects,
            fuzzy_threshold=self.config.fuzzy_threshold,
            fuzzy_order=self.config.fuzzy_order,
        )
        self.generation = generation
        self.state = BuilderState.READY
        LOGGER.info(
            "Indexed %d entries from %d project(s)", count_entries(projects), len(projects)
        )
        self._publish(list(generation.project_ids))
        return generation

    def _publish(self, project_ids: List[str]) -> None:
        if self.on_ready is None:
            return
        try:
            self.on_ready(project_ids)
        except Exception:
            LOGGER.exception("Publishing project ids failed; the index stays ready")

    def _read_local(self) -> Any:
        path = self.config.resolve_payload_path(self.base_dir)
        if path is None:
            raise ValueError("No payload path or URL configured")
        LOGGER.info("Reading hover documentation from %s", path)
        return read_json(path)

    async def _fetch(self, url: str) -> Any:
        LOGGER.info("Fetching hover documentation from %s", url)
        if self.client is not None:
            response = await self.client.get(url)
        else:
            async with httpx.AsyncClient(timeout=self.config.http_timeout) as client:
                response = await client.get(url)
        response.raise_for_status()
        return response.json()
