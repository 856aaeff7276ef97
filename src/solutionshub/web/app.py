"""FastAPI application backing the Solutions Hub grid UI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from solutionshub import __version__
from solutionshub.clients.api import AiSearchResponse, CatalogueError, SolutionsApiClient
from solutionshub.config import AppConfig
from solutionshub.hub.controller import SolutionsHub
from solutionshub.hub.state import (
    AiResponded,
    CatalogueLoaded,
    HubState,
    QueryChanged,
    SearchSubmitted,
    ViewportResized,
    reduce,
    view,
)
from solutionshub.models import Item
from solutionshub.ranking.ranker import Ranker
from solutionshub.utils.files import load_catalogue
from solutionshub.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="SolutionsHub Web", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class RankPayload(BaseModel):
    query: str
    catalogue: Path | None = None
    top_k: int = 20


class CardPayload(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    category: str | None = None
    cols: int = 2
    rows: int = 1

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            cols=self.cols,
            rows=self.rows,
        )


class LayoutPayload(BaseModel):
    query: str = ""
    height: float | None = None
    width: float | None = None
    catalogue: Path | None = None
    # AI cards on screen; when set the grid keeps them instead of ranking locally
    ai_results: List[CardPayload] | None = None


class AiSearchPayload(LayoutPayload):
    pass


def _api_client(config: AppConfig) -> SolutionsApiClient:
    return SolutionsApiClient(
        config.api_url or "",
        timeout=config.request_timeout,
        ai_timeout=config.ai_timeout,
    )


async def _get_catalogue(config: AppConfig) -> List[Item]:
    """Load items from a snapshot file, or from the catalogue API when none is set."""
    resolved = config.resolve_catalogue_path(Path.cwd())
    if resolved is not None:
        if not resolved.exists():
            raise HTTPException(status_code=404, detail=f"Catalogue not found at {resolved}")
        try:
            return await asyncio.to_thread(load_catalogue, resolved)
        except (OSError, ValueError) as exc:
            LOGGER.error("Unable to read catalogue %s: %s", resolved, exc)
            raise HTTPException(status_code=400, detail=f"Invalid catalogue: {exc}") from exc

    try:
        return await _api_client(config).fetch_catalogue(limit=config.catalogue_limit)
    except CatalogueError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def _config_for(catalogue: Path | None) -> AppConfig:
    return AppConfig(catalogue_path=catalogue)


def _replay_ai_results(state: HubState, query: str, cards: List[CardPayload]) -> HubState:
    """Rebuild the AI mode a client is showing from the cards it already holds."""
    state = reduce(state, SearchSubmitted(query))
    response = AiSearchResponse(success=True, cards=tuple(card.to_item() for card in cards))
    return reduce(state, AiResponded(token=state.request_token, response=response))


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/catalogue")
async def get_catalogue(catalogue: Path | None = None) -> dict[str, Any]:
    """List the default catalogue feeding the idle grid."""
    items = await _get_catalogue(_config_for(catalogue))
    return {"count": len(items), "items": [item.to_dict() for item in items]}


@app.post("/rank")
async def rank_solutions(payload: RankPayload) -> dict[str, Any]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    top_k = max(1, min(payload.top_k, 100))
    items = await _get_catalogue(_config_for(payload.catalogue))
    matches = Ranker(items).rank(query, top_k=top_k)
    return {
        "query": query,
        "matches": [{"score": match.score, **match.item.to_dict()} for match in matches],
    }


@app.post("/layout")
async def layout_grid(payload: LayoutPayload) -> dict[str, Any]:
    """Place the catalogue, or the AI cards a client already holds, around the search slot."""
    config = _config_for(payload.catalogue)
    items = await _get_catalogue(config)

    state = HubState(reserved_index=config.reserved_index)
    state = reduce(state, CatalogueLoaded(items))
    state = reduce(state, ViewportResized(height=payload.height or 0, width=payload.width or 0))
    if payload.ai_results is not None and payload.query.strip():
        state = _replay_ai_results(state, payload.query, payload.ai_results)
    state = reduce(state, QueryChanged(payload.query))
    return view(state).to_dict()


@app.post("/ai-search")
async def ai_search(payload: AiSearchPayload) -> dict[str, Any]:
    """Run an AI search and return the grid built from its result cards."""
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Empty query")

    config = _config_for(payload.catalogue)
    items = await _get_catalogue(config)

    hub = SolutionsHub(
        _api_client(config),
        state=HubState(reserved_index=config.reserved_index),
    )
    hub.set_catalogue(items)
    hub.resize(payload.height or 0, payload.width or 0)
    hub.type_query(payload.query)
    await hub.submit(payload.query)
    return {
        **hub.view().to_dict(),
        "ai_results": [item.to_dict() for item in hub.state.ai_results],
    }
