"""Tests for text utility functions."""

from __future__ import annotations

from solutionshub.utils.text import contains_all, fold, normalize_query, split_terms


class TestNormalizeQuery:
    """Test normalize_query function."""

    def test_trims_and_lowercases(self) -> None:
        assert normalize_query("  Chat BOT \n") == "chat bot"

    def test_empty_input(self) -> None:
        """None and blank strings normalize to empty."""
        assert normalize_query(None) == ""
        assert normalize_query("") == ""
        assert normalize_query("   ") == ""


class TestSplitTerms:
    """Test split_terms function."""

    def test_splits_on_any_whitespace(self) -> None:
        assert split_terms("voice  speech\tnlp") == ("voice", "speech", "nlp")

    def test_empty_text(self) -> None:
        assert split_terms("") == ()


class TestHelpers:
    """Test fold and contains_all."""

    def test_fold(self) -> None:
        assert fold("NLP") == "nlp"
        assert fold(None) == ""

    def test_contains_all(self) -> None:
        assert contains_all("vision analytics platform", ["platform", "vision"])
        assert not contains_all("vision analytics platform", ["platform", "voice"])

    def test_contains_all_empty_terms(self) -> None:
        """An empty term list never counts as contained."""
        assert not contains_all("anything", [])
