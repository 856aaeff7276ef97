"""Async coordinator driving the hub reducer from user input and collaborators."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from solutionshub.clients.api import (
    AiSearchClient,
    AiSearchError,
    AiSearchRequest,
    CatalogueError,
    SolutionsApiClient,
    new_session_id,
)
from solutionshub.hub.state import (
    AiFailed,
    AiResponded,
    CatalogueLoaded,
    Event,
    HubState,
    HubView,
    QueryChanged,
    SearchSubmitted,
    ViewportResized,
    reduce,
    view,
)
from solutionshub.models import Item

LOGGER = logging.getLogger(__name__)


class ScrollCoordinator:
    """Forwards scroll requests for the search slot to the hosting view."""

    def __init__(self, callback: Optional[Callable[[], None]] = None) -> None:
        self.callback = callback
        self.requests = 0

    def request_scroll_to_reserved_slot(self) -> None:
        self.requests += 1
        LOGGER.debug("Scroll to search slot requested (%d)", self.requests)
        if self.callback is not None:
            self.callback()


class SolutionsHub:
    """Owns the hub state and runs AI searches against a collaborator.

    Only one AI request is current at a time. Each submission bumps the
    request token in the state; the response is dispatched with the token it
    was issued under, so responses to superseded or cleared searches are
    dropped by the reducer. In-flight requests are never cancelled.
    """

    def __init__(
        self,
        ai_client: AiSearchClient,
        *,
        catalogue_client: SolutionsApiClient | None = None,
        scroll: ScrollCoordinator | None = None,
        state: HubState | None = None,
        catalogue_limit: int = 100,
    ) -> None:
        self.ai_client = ai_client
        self.catalogue_client = catalogue_client
        self.scroll = scroll or ScrollCoordinator()
        self.state = state or HubState()
        self.catalogue_limit = catalogue_limit

    def dispatch(self, event: Event) -> HubState:
        previous = self.state
        self.state = reduce(previous, event)
        if self.state.scroll_requests > previous.scroll_requests:
            self.scroll.request_scroll_to_reserved_slot()
        if self.state.notice is not None and self.state.notice is not previous.notice:
            LOGGER.info("[%s] %s", self.state.notice.level, self.state.notice.message)
        return self.state

    def view(self) -> HubView:
        return view(self.state)

    async def load_catalogue(self) -> list[Item]:
        """Fetch the default catalogue once and use it as the idle source."""
        if self.catalogue_client is None:
            raise CatalogueError("No catalogue client configured")
        items = await self.catalogue_client.fetch_catalogue(limit=self.catalogue_limit)
        self.set_catalogue(items)
        return items

    def set_catalogue(self, items: Sequence[Item]) -> HubState:
        return self.dispatch(CatalogueLoaded(tuple(items)))

    def type_query(self, text: str) -> HubState:
        return self.dispatch(QueryChanged(text))

    def clear_query(self) -> HubState:
        return self.dispatch(QueryChanged(""))

    def resize(self, height: float, width: float) -> HubState:
        return self.dispatch(ViewportResized(height=height, width=width))

    async def submit(self, query: str) -> HubState:
        """Run an AI search for ``query`` and apply its result if still current."""
        if not query.strip():
            return self.state

        self.dispatch(SearchSubmitted(query))
        token = self.state.request_token
        request = AiSearchRequest(query=query.strip(), session_id=new_session_id())
        LOGGER.info("AI search %d issued for %r", token, request.query)

        try:
            response = await self.ai_client.ai_search(request)
        except AiSearchError as exc:
            return self.dispatch(AiFailed(token=token, error=str(exc)))
        except Exception as exc:
            LOGGER.exception("AI search %d raised unexpectedly", token)
            return self.dispatch(AiFailed(token=token, error=str(exc) or type(exc).__name__))
        return self.dispatch(AiResponded(token=token, response=response))
