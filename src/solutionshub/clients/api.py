"""HTTP clients for the catalogue and AI search collaborators."""

from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol, Sequence

import httpx

from solutionshub.models import Item, grid_dimensions

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"
UNTITLED = "Untitled Solution"


class ApiError(RuntimeError):
    """Base error for collaborator failures."""


class CatalogueError(ApiError):
    """The default catalogue could not be fetched."""


class AiSearchError(ApiError):
    """The AI search request failed in transport or at the server."""


def new_session_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"search_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True, slots=True)
class AiSearchRequest:
    query: str
    session_id: str = field(default_factory=new_session_id)

    def to_payload(self) -> Dict[str, str]:
        return {"message": self.query.strip(), "sessionId": self.session_id}


@dataclass(frozen=True, slots=True)
class AiSearchResponse:
    """Parsed AI search response; malformed card lists count as empty."""

    success: bool
    cards: tuple[Item, ...] = ()
    solutions_found: int = 0
    error: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> AiSearchResponse:
        if not isinstance(payload, Mapping):
            return cls(success=False, error="Malformed response")

        data = payload.get("data")
        data = data if isinstance(data, Mapping) else {}
        raw_cards = data.get("solutionCards")
        cards = cards_to_items(raw_cards) if isinstance(raw_cards, list) else []

        context = data.get("context")
        found = context.get("solutionsFound", 0) if isinstance(context, Mapping) else 0
        try:
            solutions_found = int(found or 0)
        except (TypeError, ValueError):
            solutions_found = 0

        return cls(
            success=bool(payload.get("success")),
            cards=tuple(cards),
            solutions_found=solutions_found,
            error=payload.get("error"),
        )


class AiSearchClient(Protocol):
    async def ai_search(self, request: AiSearchRequest) -> AiSearchResponse: ...


def _first_text(record: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = record.get(key)
        if value:
            return str(value)
    return ""


def solution_to_item(solution: Mapping[str, Any], index: int) -> Item:
    """Convert a catalogue solution record into a grid item."""
    cols, rows = grid_dimensions(index)
    return Item(
        id=_first_text(solution, "_id", "id"),
        title=_first_text(solution, "title") or UNTITLED,
        description=_first_text(solution, "description", "shortDescription"),
        category=_first_text(solution, "category") or None,
        cols=cols,
        rows=rows,
    )


def card_to_item(card: Mapping[str, Any], index: int) -> Item:
    """Convert an AI result card into a grid item."""
    cols, rows = grid_dimensions(index)
    return Item(
        id=_first_text(card, "id", "_id"),
        title=_first_text(card, "title") or UNTITLED,
        description=_first_text(card, "shortDescription", "description"),
        category=_first_text(card, "category") or None,
        cols=cols,
        rows=rows,
    )


def solutions_to_items(solutions: Sequence[Any]) -> List[Item]:
    items: List[Item] = []
    for record in solutions:
        if not isinstance(record, Mapping) or not _first_text(record, "_id", "id"):
            LOGGER.warning("Skipping solution record without id")
            continue
        items.append(solution_to_item(record, len(items)))
    return items


def cards_to_items(cards: Sequence[Any]) -> List[Item]:
    items: List[Item] = []
    for card in cards:
        if not isinstance(card, Mapping) or not _first_text(card, "id", "_id"):
            LOGGER.warning("Skipping AI card without id")
            continue
        items.append(card_to_item(card, len(items)))
    return items


class SolutionsApiClient:
    """Async client for the marketplace backend."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float = 10.0,
        ai_timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.ai_timeout = ai_timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def fetch_catalogue(self, *, limit: int = 100, page: int = 1) -> List[Item]:
        """Fetch the default catalogue page used for the idle grid."""
        try:
            async with self._client(self.timeout) as client:
                response = await client.get("/solutions", params={"page": page, "limit": limit})
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.error("Catalogue request failed: %s", exc)
            raise CatalogueError(f"Failed to load solutions: {exc}") from exc

        solutions = body.get("solutions") if isinstance(body, Mapping) else None
        if not isinstance(solutions, list):
            raise CatalogueError("Failed to load solutions: response has no solutions list")
        items = solutions_to_items(solutions)
        LOGGER.info("Loaded %d catalogue items", len(items))
        return items

    async def ai_search(self, request: AiSearchRequest) -> AiSearchResponse:
        """Send the query to the AI agent and parse its result cards."""
        try:
            async with self._client(self.ai_timeout) as client:
                response = await client.post("/chat/message", json=request.to_payload())
                if response.is_error:
                    raise AiSearchError(_error_detail(response) or "Failed to send message")
                body = response.json()
        except httpx.TimeoutException as exc:
            LOGGER.error("AI search timed out for session %s", request.session_id)
            raise AiSearchError("AI search timed out") from exc
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.error("AI search failed: %s", exc)
            raise AiSearchError(f"Failed to send message: {exc}") from exc

        return AiSearchResponse.from_payload(body)


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping) and body.get("error"):
        return str(body["error"])
    return None
