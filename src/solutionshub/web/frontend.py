"""Static HTML frontend for the Solutions Hub grid."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib.resources import files

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from solutionshub import __version__
from solutionshub.hub.state import LOADING_HINT

router = APIRouter()

TEMPLATE_NAME = "index.html"


@lru_cache(maxsize=1)
def _load_template() -> str:
    template = files("solutionshub.web").joinpath("templates", TEMPLATE_NAME).read_text(encoding="utf-8")
    return template.replace("__LOADING_HINT__", json.dumps(LOADING_HINT))


@router.get("/", response_class=HTMLResponse)
async def hub_page() -> HTMLResponse:
    """Serve the grid page; layout requests go to the JSON endpoints."""
    return HTMLResponse(content=_load_template())


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
