"""Tests for query relevance scoring."""

from __future__ import annotations

import pytest

from solutionshub.models import Item
from solutionshub.ranking.scorer import (
    ALL_TERMS_IN_TITLE_SCORE,
    EXACT_TITLE_SCORE,
    MIN_MATCH_SCORE,
    TITLE_PHRASE_SCORE,
    Query,
    is_match,
    score_item,
)


class TestQuery:
    """Test Query parsing."""

    def test_parse(self) -> None:
        query = Query.parse("  Voice  Assistant ")

        assert query.text == "voice  assistant"
        assert query.terms == ("voice", "assistant")
        assert not query.is_empty

    def test_parse_blank(self) -> None:
        assert Query.parse("   ").is_empty
        assert Query.parse(None).is_empty


class TestScoreItem:
    """Test the ordered scoring rules."""

    def test_exact_title(self) -> None:
        """Exact case-folded title match scores 1000."""
        item = Item(id="c", title="Chatbot", description="chatbot chatbot", category="chatbot")

        assert score_item("chatbot", item) == EXACT_TITLE_SCORE == 1000

    def test_title_contains_query(self) -> None:
        item = Item(id="c", title="AI Chatbot Pro")

        assert score_item("chatbot", item) == TITLE_PHRASE_SCORE == 500

    def test_all_terms_in_title(self) -> None:
        """Terms in any order, all inside the title, score 300."""
        item = Item(id="v", title="Vision Analytics Platform")

        assert score_item("platform vision", item) == ALL_TERMS_IN_TITLE_SCORE == 300

    def test_terms_accumulate(self) -> None:
        """Per-term hits add up across title, description and category."""
        item = Item(
            id="v",
            title="Voice Assistant",
            description="Speech recognition for kiosks",
            category="NLP",
        )

        assert score_item("voice speech nlp", item) == 100 + 50 + 75

    def test_category_only_is_below_threshold(self) -> None:
        item = Item(id="f", title="Fraud Detector", category="Finance")

        score = score_item("finance", item)

        assert score == 75
        assert score < MIN_MATCH_SCORE
        assert not is_match(score)

    def test_description_only(self) -> None:
        item = Item(id="f", title="Fraud Detector", description="Flags suspicious payments")

        assert score_item("payments", item) == 50

    def test_missing_category(self) -> None:
        item = Item(id="f", title="Fraud Detector", category=None)

        assert score_item("fraud finance", item) == 100

    def test_no_hits(self) -> None:
        item = Item(id="f", title="Fraud Detector")

        assert score_item("zzz-no-match", item) == 0

    def test_empty_query(self) -> None:
        item = Item(id="f", title="Fraud Detector")

        assert score_item("", item) == 0
        assert score_item("   ", item) == 0

    @pytest.mark.parametrize("raw", ["CHATBOT", "  chatbot  ", "\tChatBot\n"])
    def test_invariant_under_case_and_whitespace(self, raw: str) -> None:
        item = Item(id="c", title="Chatbot")

        assert score_item(raw, item) == score_item("chatbot", item)

    def test_accepts_parsed_query(self) -> None:
        item = Item(id="c", title="Chatbot")

        assert score_item(Query.parse("Chatbot"), item) == EXACT_TITLE_SCORE


def test_threshold() -> None:
    assert is_match(100)
    assert not is_match(99)
