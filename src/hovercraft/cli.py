"""Command line interface for Hovercraft Search."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from hovercraft.config import AppConfig
from hovercraft.index.builder import BuilderState, IndexBuilder
from hovercraft.models import SearchRequest, SearchResponse
from hovercraft.search.backends import RemoteBackend, RemoteSearchError
from hovercraft.search.router import QueryRouter
from hovercraft.utils.text import snippet
from hovercraft.web.app import create_app


console = Console()
app = typer.Typer(help="Hovercraft Search - exact and fuzzy search over hover documentation")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _location(uri: str, range_: dict) -> str:
    start = range_.get("start") if isinstance(range_, dict) else None
    if isinstance(start, dict) and "line" in start:
        return f"{uri}:{start['line'] + 1}"
    return uri


async def _load_and_search(config: AppConfig, request: SearchRequest) -> tuple[BuilderState, SearchResponse]:
    builder = IndexBuilder(config, base_dir=Path.cwd())
    remote = None
    if config.remote_search_url:
        remote = RemoteBackend(config.remote_search_url, timeout=config.http_timeout)
    # Remote exact search does not need the local payload.
    if request.is_fuzzy_mode or remote is None:
        await builder.load()
    router = QueryRouter(builder, remote=remote, limit=config.result_limit)
    return builder.state, await router.route(request)


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    payload: Path = typer.Option(None, "--payload", help="Hover documentation JSON file"),
    url: Optional[str] = typer.Option(None, "--url", help="Fetch the payload from this URL instead"),
    fuzzy: bool = typer.Option(False, "--fuzzy", "-f", help="Use approximate matching"),
    project: List[str] = typer.Option([], "--project", "-p", help="Restrict to these project ids"),
    remote: Optional[str] = typer.Option(None, "--remote", help="Delegate exact search to this server"),
    limit: int = typer.Option(20, min=1, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search hover documentation."""
    _setup_logging(verbose)
    config = AppConfig(
        payload_path=payload if payload is not None else AppConfig().payload_path,
        payload_url=url,
        remote_search_url=remote,
        result_limit=limit,
    )
    request = SearchRequest(query=query, is_fuzzy_mode=fuzzy, project_ids=project)

    try:
        state, response = asyncio.run(_load_and_search(config, request))
    except RemoteSearchError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if state is BuilderState.FAILED:
        console.print("[red]Hover documentation could not be loaded.[/red]")
        raise typer.Exit(code=1)
    if not response.results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Project")
    table.add_column("Definition")
    table.add_column("Hover")

    for result in response.results:
        entry = result.hit
        table.add_row(
            f"{result.score:.4f}",
            entry.project_id or "-",
            _location(entry.definition.get("uri", ""), entry.definition.get("range", {})),
            snippet(entry.text),
        )

    console.print(table)


@app.command()
def projects(
    payload: Path = typer.Option(None, "--payload", help="Hover documentation JSON file"),
    url: Optional[str] = typer.Option(None, "--url", help="Fetch the payload from this URL instead"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the project ids found in the payload."""
    _setup_logging(verbose)
    config = AppConfig(
        payload_path=payload if payload is not None else AppConfig().payload_path,
        payload_url=url,
    )
    published: List[List[str]] = []
    builder = IndexBuilder(config, on_ready=published.append, base_dir=Path.cwd())
    state = asyncio.run(builder.load())
    if state is BuilderState.FAILED:
        console.print("[red]Hover documentation could not be loaded.[/red]")
        raise typer.Exit(code=1)

    project_ids = published[0] if published else []
    if not project_ids:
        console.print("[yellow]No projects found.[/yellow]")
        return
    for project_id in project_ids:
        console.print(project_id)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    payload: Path = typer.Option(None, "--payload", help="Hover documentation JSON file"),
) -> None:
    """Serve the payload and the search endpoint over HTTP."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(payload_path=payload if payload is not None else AppConfig().payload_path)
    resolved = config.resolve_payload_path(Path.cwd())
    if resolved is None or not resolved.exists():
        console.print("[yellow]Warning: payload not found, searches will return nothing.[/yellow]")

    console.print(f"Starting web interface on http://{host}:{port} (payload: {resolved})")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
