"""FastAPI application serving the payload and a server-side search endpoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from hovercraft import __version__
from hovercraft.config import AppConfig
from hovercraft.index.builder import BuilderState, IndexBuilder
from hovercraft.models import SearchRequest
from hovercraft.search.router import QueryRouter
from hovercraft.utils.files import read_json

LOGGER = logging.getLogger(__name__)


def _resolve_payload_path(config: AppConfig) -> Optional[Path]:
    return config.resolve_payload_path(Path.cwd())


async def _ready_builder(request: Request) -> IndexBuilder:
    builder: IndexBuilder = request.app.state.builder
    if builder.state is BuilderState.EMPTY:
        await builder.load()
    return builder


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig()
    # The web app always indexes the local payload it serves.
    local_config = AppConfig(
        payload_path=config.payload_path,
        fuzzy_threshold=config.fuzzy_threshold,
        fuzzy_order=config.fuzzy_order,
        result_limit=config.result_limit,
    )
    builder = IndexBuilder(local_config, base_dir=Path.cwd())

    app = FastAPI(title="Hovercraft Search", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = local_config
    app.state.builder = builder
    app.state.router = QueryRouter(builder, limit=local_config.result_limit)

    @app.get("/hovercraft")
    async def hovercraft() -> Any:
        path = _resolve_payload_path(local_config)
        if path is None or not path.exists():
            raise HTTPException(status_code=404, detail=f"Payload not found at {path}")
        try:
            return read_json(path)
        except ValueError as exc:
            LOGGER.error("Unable to decode %s: %s", path, exc)
            raise HTTPException(status_code=500, detail="Payload is not valid JSON") from exc

    @app.get("/projects")
    async def projects(request: Request) -> dict[str, List[str]]:
        builder = await _ready_builder(request)
        return {"projectIds": builder.generation.project_ids}

    @app.get("/search")
    async def search(
        request: Request,
        q: str = "",
        project_ids: List[str] = Query(default=[], alias="projectIds[]"),
        placeholder: Optional[str] = None,
        fuzzy: bool = False,
    ) -> dict[str, Any]:
        query = q.strip()
        if not query:
            raise HTTPException(status_code=400, detail="Empty query")

        builder = await _ready_builder(request)
        if builder.state is BuilderState.FAILED:
            raise HTTPException(status_code=503, detail="Hover documentation could not be loaded")

        search_request = SearchRequest(
            query=query,
            is_fuzzy_mode=fuzzy,
            project_ids=project_ids,
            placeholder=placeholder,
        )
        response = await request.app.state.router.route(search_request)
        return response.to_dict()

    return app
