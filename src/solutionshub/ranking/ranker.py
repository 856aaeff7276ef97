"""Score-ordered matching over the in-memory catalogue."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from solutionshub.models import Item, ScoredItem
from solutionshub.ranking.scorer import Query, is_match, score_item

LOGGER = logging.getLogger(__name__)


def rank_items(query: Query | str | None, items: Iterable[Item]) -> List[ScoredItem]:
    """Return matching items sorted by descending score.

    Ties keep catalogue order. An empty query yields no matches.
    """
    parsed = query if isinstance(query, Query) else Query.parse(query)
    if parsed.is_empty:
        return []

    matches: List[ScoredItem] = []
    for item in items:
        score = score_item(parsed, item)
        if is_match(score):
            matches.append(ScoredItem(item=item, score=score))

    matches.sort(key=lambda match: match.score, reverse=True)
    LOGGER.debug("Query %r matched %d items", parsed.text, len(matches))
    return matches


def split_unmatched(matches: Sequence[ScoredItem], items: Iterable[Item]) -> List[Item]:
    """Catalogue items absent from ``matches``, in original order."""
    matched_ids = {match.item.id for match in matches}
    return [item for item in items if item.id not in matched_ids]


class Ranker:
    """Ranks queries against a fixed catalogue."""

    def __init__(self, catalogue: Sequence[Item]) -> None:
        self.catalogue = tuple(catalogue)

    def rank(self, query: Query | str | None, *, top_k: int | None = None) -> List[ScoredItem]:
        matches = rank_items(query, self.catalogue)
        if top_k is not None:
            matches = matches[: max(0, top_k)]
        return matches
