"""Command line interface for SolutionsHub."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from solutionshub.clients.api import CatalogueError, SolutionsApiClient
from solutionshub.config import AppConfig
from solutionshub.hub.controller import SolutionsHub
from solutionshub.hub.state import CatalogueLoaded, HubState, HubView, QueryChanged, ViewportResized, reduce, view
from solutionshub.layout.allocator import ordered_slots, slot_distance
from solutionshub.models import Item
from solutionshub.ranking.ranker import Ranker
from solutionshub.utils.files import load_catalogue
from solutionshub.web.app import app as web_app


console = Console()
app = typer.Typer(help="SolutionsHub - relevance-ranked solutions grid")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _api_client(config: AppConfig) -> SolutionsApiClient:
    return SolutionsApiClient(
        config.api_url or "",
        timeout=config.request_timeout,
        ai_timeout=config.ai_timeout,
    )


def _load_items(config: AppConfig) -> List[Item]:
    resolved = config.resolve_catalogue_path(Path.cwd())
    if resolved is not None:
        if not resolved.exists():
            raise typer.BadParameter(f"Catalogue not found: {resolved}")
        return load_catalogue(resolved)

    try:
        return asyncio.run(_api_client(config).fetch_catalogue(limit=config.catalogue_limit))
    except CatalogueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def _print_view(result: HubView, show: int) -> None:
    console.print(f"Mode: [bold]{result.mode.value}[/bold]")
    if result.hint:
        console.print(f"[yellow]{result.hint}[/yellow]")
    if result.notice:
        colour = "green" if result.notice.level == "success" else "red"
        console.print(f"[{colour}]{result.notice.message}[/{colour}]")

    assignment = result.assignment
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Slot")
    table.add_column("Distance")
    table.add_column("Solution")
    table.add_column("Category")
    table.add_column("Size")

    table.add_row(str(assignment.reserved_index), "-", "[bold]search[/bold]", "", "8x1")
    for index in ordered_slots(assignment.total_slots, assignment.reserved_index)[:show]:
        item = assignment[index]
        title = "[dim]filler[/dim]" if item.is_filler else item.title
        table.add_row(
            str(index),
            str(slot_distance(index, assignment.reserved_index)),
            title,
            item.category or "",
            f"{item.cols}x{item.rows}",
        )
    console.print(table)
    console.print(f"{assignment.total_slots} slots, {len(assignment.items())} solutions placed")


@app.command()
def rank(
    query: str = typer.Argument(..., help="Query text"),
    catalogue: Path = typer.Option(None, "--catalogue", "-c", help="Catalogue JSON snapshot"),
    top_k: int = typer.Option(10, help="Number of matches to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank catalogue solutions against a query."""
    _setup_logging(verbose)
    items = _load_items(AppConfig(catalogue_path=catalogue))

    matches = Ranker(items).rank(query, top_k=top_k)
    if not matches:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Category")
    for match in matches:
        table.add_row(str(match.score), match.item.id, match.item.title, match.item.category or "")
    console.print(table)


@app.command()
def layout(
    query: str = typer.Argument("", help="Query text; empty shows the idle grid"),
    catalogue: Path = typer.Option(None, "--catalogue", "-c", help="Catalogue JSON snapshot"),
    height: float = typer.Option(900, help="Viewport height in pixels"),
    width: float = typer.Option(1440, help="Viewport width in pixels"),
    show: int = typer.Option(20, help="Number of slots to list, closest first"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show how the grid is filled around the search slot."""
    _setup_logging(verbose)
    config = AppConfig(catalogue_path=catalogue)
    items = _load_items(config)

    state = HubState(reserved_index=config.reserved_index)
    state = reduce(state, CatalogueLoaded(items))
    state = reduce(state, ViewportResized(height=height, width=width))
    state = reduce(state, QueryChanged(query))
    result = view(state)
    _print_view(result, show)
    if state.best_match is not None:
        slot = result.assignment.slot_of(state.best_match.id)
        console.print(f"Best match: [bold]{state.best_match.title}[/bold] in slot {slot}")


@app.command("ai-search")
def ai_search(
    query: str = typer.Argument(..., help="Query text sent to the AI agent"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Marketplace API base URL"),
    catalogue: Path = typer.Option(None, "--catalogue", "-c", help="Catalogue JSON snapshot to restore on failure"),
    height: float = typer.Option(900, help="Viewport height in pixels"),
    width: float = typer.Option(1440, help="Viewport width in pixels"),
    show: int = typer.Option(20, help="Number of slots to list, closest first"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run an AI search and show the resulting grid."""
    _setup_logging(verbose)
    if not query.strip():
        raise typer.BadParameter("Empty query")

    config = AppConfig(api_url=api_url, catalogue_path=catalogue)
    hub = SolutionsHub(_api_client(config), state=HubState(reserved_index=config.reserved_index))
    if config.catalogue_path is not None:
        hub.set_catalogue(_load_items(config))
    hub.resize(height, width)
    hub.type_query(query)

    asyncio.run(hub.submit(query))
    _print_view(hub.view(), show)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig()
    source = config.catalogue_path or config.api_url
    console.print(f"Starting web interface on http://{host}:{port} (catalogue: {source})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
