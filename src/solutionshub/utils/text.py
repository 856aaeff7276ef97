"""Text helpers for query handling."""

from __future__ import annotations

from typing import Iterable


def normalize_query(text: str | None) -> str:
    """Trim and case-fold raw search input."""
    if not text:
        return ""
    return text.strip().lower()


def split_terms(text: str) -> tuple[str, ...]:
    """Split normalized text on whitespace, dropping empty terms."""
    return tuple(term for term in text.split() if term)


def fold(value: str | None) -> str:
    return value.lower() if value else ""


def contains_all(haystack: str, terms: Iterable[str]) -> bool:
    """Return True when every term is a substring of ``haystack``.

    An empty term list is never considered contained.
    """
    terms = list(terms)
    return bool(terms) and all(term in haystack for term in terms)
