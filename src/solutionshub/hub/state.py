"""Search mode state machine for the Solutions Hub grid.

The hub is modelled as a pure reducer: ``reduce(state, event)`` returns a new
:class:`HubState` and never performs I/O. Every visible value (the slot
assignment, the hint on the search control, the scroll signal) is derived from
the state, so transitions can be tested without a UI or a network.

Asynchronous AI searches are tagged with ``request_token``. A response is only
applied when its token equals the current token and the hub is still loading;
anything else is stale and ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Sequence, Union

from solutionshub.clients.api import AiSearchResponse
from solutionshub.layout.allocator import SEARCH_SLOT_INDEX, allocate, arrange_matches
from solutionshub.layout.viewport import MIN_TOTAL_SLOTS, total_slots_for_viewport
from solutionshub.models import Item, ScoredItem, SearchMode, SlotAssignment
from solutionshub.ranking.ranker import rank_items

LOGGER = logging.getLogger(__name__)

NO_MATCH_HINT = "No exact match for your asked solution please enter to go through deep search."
LOADING_HINT = "Searching solutions with the AI agent..."
AI_EMPTY_MESSAGE = "No relevant solutions found. Try a different search query."
AI_FAILURE_MESSAGE = "Failed to search with AI agent. Please try again."


@dataclass(frozen=True, slots=True)
class Notice:
    """Toast-style message raised by a transition."""

    level: str
    message: str


@dataclass(frozen=True, slots=True)
class HubState:
    saved_catalogue: tuple[Item, ...] = ()
    query: str = ""
    mode: SearchMode = SearchMode.IDLE
    shown_mode: SearchMode = SearchMode.IDLE
    matches: tuple[ScoredItem, ...] = ()
    ai_results: tuple[Item, ...] = ()
    request_token: int = 0
    total_slots: int = MIN_TOTAL_SLOTS
    reserved_index: int = SEARCH_SLOT_INDEX
    scroll_requests: int = 0
    notice: Notice | None = None

    @property
    def best_match(self) -> Item | None:
        return self.matches[0].item if self.matches else None


@dataclass(frozen=True, slots=True)
class CatalogueLoaded:
    items: Sequence[Item]


@dataclass(frozen=True, slots=True)
class QueryChanged:
    text: str


@dataclass(frozen=True, slots=True)
class SearchSubmitted:
    query: str


@dataclass(frozen=True, slots=True)
class AiResponded:
    token: int
    response: AiSearchResponse


@dataclass(frozen=True, slots=True)
class AiFailed:
    token: int
    error: str


@dataclass(frozen=True, slots=True)
class ViewportResized:
    height: float
    width: float


Event = Union[CatalogueLoaded, QueryChanged, SearchSubmitted, AiResponded, AiFailed, ViewportResized]


def reduce(state: HubState, event: Event) -> HubState:
    """Apply ``event`` to ``state`` and return the resulting state."""
    if isinstance(event, QueryChanged):
        return _on_query_changed(state, event.text)
    if isinstance(event, SearchSubmitted):
        return _on_search_submitted(state, event.query)
    if isinstance(event, AiResponded):
        return _on_ai_responded(state, event)
    if isinstance(event, AiFailed):
        return _on_ai_failed(state, event)
    if isinstance(event, CatalogueLoaded):
        return _on_catalogue_loaded(state, tuple(event.items))
    if isinstance(event, ViewportResized):
        return replace(state, total_slots=total_slots_for_viewport(event.height, event.width))
    raise TypeError(f"Unsupported event: {event!r}")


def _idle(state: HubState, **changes: Any) -> HubState:
    return replace(
        state,
        mode=SearchMode.IDLE,
        shown_mode=SearchMode.IDLE,
        matches=(),
        ai_results=(),
        **changes,
    )


def _rank_locally(state: HubState) -> HubState:
    matches = tuple(rank_items(state.query, state.saved_catalogue))
    if not matches:
        return replace(
            state,
            mode=SearchMode.NO_LOCAL_MATCH,
            shown_mode=SearchMode.NO_LOCAL_MATCH,
            matches=(),
        )

    previous_best = state.best_match if state.mode is SearchMode.LOCAL_MATCH else None
    scroll_requests = state.scroll_requests
    if previous_best is None or previous_best.id != matches[0].item.id:
        scroll_requests += 1
    return replace(
        state,
        mode=SearchMode.LOCAL_MATCH,
        shown_mode=SearchMode.LOCAL_MATCH,
        matches=matches,
        scroll_requests=scroll_requests,
    )


def _on_query_changed(state: HubState, text: str) -> HubState:
    state = replace(state, query=text, notice=None)
    if not text.strip():
        if state.mode is SearchMode.AI_LOADING:
            LOGGER.debug("Query cleared, request %d will be ignored", state.request_token)
        return _idle(state)
    if state.mode.is_ai:
        return state
    return _rank_locally(state)


def _on_search_submitted(state: HubState, query: str) -> HubState:
    if not query.strip():
        return state
    return replace(
        state,
        query=query,
        mode=SearchMode.AI_LOADING,
        request_token=state.request_token + 1,
        notice=None,
    )


def _is_current(state: HubState, token: int) -> bool:
    if state.mode is not SearchMode.AI_LOADING or token != state.request_token:
        LOGGER.info(
            "Ignoring stale AI response (token %d, current %d, mode %s)",
            token,
            state.request_token,
            state.mode.value,
        )
        return False
    return True


def _on_ai_responded(state: HubState, event: AiResponded) -> HubState:
    if not _is_current(state, event.token):
        return state

    response = event.response
    if not response.success:
        return _on_ai_failed(state, AiFailed(event.token, response.error or "Unsuccessful response"))

    if not response.cards:
        return replace(
            state,
            mode=SearchMode.AI_EMPTY,
            shown_mode=SearchMode.AI_EMPTY,
            matches=(),
            ai_results=(),
            notice=Notice("error", AI_EMPTY_MESSAGE),
        )

    notice = None
    if response.solutions_found > 0:
        plural = "s" if response.solutions_found > 1 else ""
        notice = Notice(
            "success",
            f"Found {response.solutions_found} relevant solution{plural} based on your query",
        )
    return replace(
        state,
        mode=SearchMode.AI_RESULT,
        shown_mode=SearchMode.AI_RESULT,
        matches=(),
        ai_results=tuple(response.cards),
        notice=notice,
    )


def _on_ai_failed(state: HubState, event: AiFailed) -> HubState:
    if not _is_current(state, event.token):
        return state
    LOGGER.warning("AI search failed, restoring catalogue: %s", event.error)
    return _idle(state, notice=Notice("error", AI_FAILURE_MESSAGE))


def _on_catalogue_loaded(state: HubState, items: tuple[Item, ...]) -> HubState:
    state = replace(state, saved_catalogue=items)
    if state.mode in (SearchMode.LOCAL_MATCH, SearchMode.NO_LOCAL_MATCH):
        return _rank_locally(state)
    return state


def source_items(state: HubState) -> list[Item]:
    """Items feeding the allocator for the currently visible mode."""
    shown = state.shown_mode
    if shown is SearchMode.LOCAL_MATCH:
        return arrange_matches(state.matches, state.saved_catalogue)
    if shown is SearchMode.AI_RESULT:
        return list(state.ai_results)
    if shown is SearchMode.AI_EMPTY:
        return []
    return list(state.saved_catalogue)


def slot_assignment(state: HubState) -> SlotAssignment:
    return allocate(source_items(state), state.total_slots, reserved_index=state.reserved_index)


def hint_for(state: HubState) -> str | None:
    if not state.query.strip():
        return None
    if state.mode is SearchMode.NO_LOCAL_MATCH:
        return NO_MATCH_HINT
    if state.mode is SearchMode.AI_LOADING:
        return LOADING_HINT
    if state.mode is SearchMode.AI_EMPTY:
        return AI_EMPTY_MESSAGE
    return None


@dataclass(frozen=True, slots=True)
class HubView:
    """Everything the grid renderer needs."""

    assignment: SlotAssignment
    mode: SearchMode
    hint: str | None
    notice: Notice | None
    scroll_requests: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "hint": self.hint,
            "notice": {"level": self.notice.level, "message": self.notice.message} if self.notice else None,
            "scroll_requests": self.scroll_requests,
            "grid": self.assignment.to_dict(),
        }


def view(state: HubState) -> HubView:
    return HubView(
        assignment=slot_assignment(state),
        mode=state.mode,
        hint=hint_for(state),
        notice=state.notice,
        scroll_requests=state.scroll_requests,
    )
