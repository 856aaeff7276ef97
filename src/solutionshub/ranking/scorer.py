"""Relevance scoring of catalogue items against free-text queries."""

from __future__ import annotations

from dataclasses import dataclass

from solutionshub.models import Item
from solutionshub.utils.text import contains_all, fold, normalize_query, split_terms

# Product tuning values. Keep them exact; ranking order depends on every one.
EXACT_TITLE_SCORE = 1000
TITLE_PHRASE_SCORE = 500
ALL_TERMS_IN_TITLE_SCORE = 300
TERM_IN_TITLE_SCORE = 100
TERM_IN_DESCRIPTION_SCORE = 50
TERM_IN_CATEGORY_SCORE = 75

# At least one title hit is needed before an item counts as a match.
MIN_MATCH_SCORE = 100


@dataclass(frozen=True, slots=True)
class Query:
    """Normalized query text plus its whitespace-split terms."""

    text: str
    terms: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str | None) -> Query:
        text = normalize_query(raw)
        return cls(text=text, terms=split_terms(text))

    @property
    def is_empty(self) -> bool:
        return not self.text or not self.terms


def _coerce(query: Query | str | None) -> Query:
    return query if isinstance(query, Query) else Query.parse(query)


def score_item(query: Query | str | None, item: Item) -> int:
    """Compute the integer relevance score of ``item`` for ``query``.

    Whole-query title hits short-circuit; otherwise each term contributes
    independently for title, description and category hits.
    """
    query = _coerce(query)
    if query.is_empty:
        return 0

    title = fold(item.title)
    if title == query.text:
        return EXACT_TITLE_SCORE
    if query.text in title:
        return TITLE_PHRASE_SCORE
    if contains_all(title, query.terms):
        return ALL_TERMS_IN_TITLE_SCORE

    description = fold(item.description)
    category = fold(item.category)
    score = 0
    for term in query.terms:
        if term in title:
            score += TERM_IN_TITLE_SCORE
        if term in description:
            score += TERM_IN_DESCRIPTION_SCORE
        if term in category:
            score += TERM_IN_CATEGORY_SCORE
    return score


def is_match(score: int) -> bool:
    return score >= MIN_MATCH_SCORE
