"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from solutionshub.cli import _setup_logging, app
from solutionshub.clients.api import AiSearchError, AiSearchResponse, CatalogueError

runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("solutionshub.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("solutionshub.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestRankCommand:
    """Tests for the rank command."""

    def test_rank_with_match(self, catalogue_file: Path) -> None:
        result = runner.invoke(app, ["rank", "chatbot", "--catalogue", str(catalogue_file)])

        assert result.exit_code == 0
        assert "chatbot" in result.stdout

    def test_rank_no_matches(self, catalogue_file: Path) -> None:
        """Shows a message when nothing matches."""
        result = runner.invoke(app, ["rank", "quantum", "-c", str(catalogue_file)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_rank_missing_catalogue(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["rank", "chatbot", "-c", str(tmp_path / "missing.json")])

        assert result.exit_code != 0

    def test_rank_api_unavailable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Exits with an error when the catalogue API fails."""
        monkeypatch.chdir(tmp_path)

        with patch("solutionshub.cli.SolutionsApiClient") as mock_client:
            mock_client.return_value.fetch_catalogue = AsyncMock(side_effect=CatalogueError("API down"))
            result = runner.invoke(app, ["rank", "chatbot"])

        assert result.exit_code == 1
        assert "API down" in result.stdout


class TestLayoutCommand:
    """Tests for the layout command."""

    def test_idle_layout(self, catalogue_file: Path) -> None:
        result = runner.invoke(app, ["layout", "-c", str(catalogue_file)])

        assert result.exit_code == 0
        assert "Mode: idle" in result.stdout
        assert "60 slots, 10 solutions placed" in result.stdout

    def test_local_match_layout(self, catalogue_file: Path) -> None:
        result = runner.invoke(app, ["layout", "chatbot", "-c", str(catalogue_file), "--show", "3"])

        assert result.exit_code == 0
        assert "Mode: local_match" in result.stdout
        assert "Chatbot" in result.stdout
        assert "Best match: Chatbot in slot 3" in result.stdout

    def test_no_match_hint(self, catalogue_file: Path) -> None:
        result = runner.invoke(app, ["layout", "quantum", "-c", str(catalogue_file)])

        assert result.exit_code == 0
        assert "Mode: no_local_match" in result.stdout
        assert "deep search" in result.stdout


class TestAiSearchCommand:
    """Tests for the ai-search command."""

    def test_ai_result(self, catalogue_file: Path, ai_cards: List[Dict[str, Any]]) -> None:
        response = AiSearchResponse.from_payload(
            {"success": True, "data": {"solutionCards": ai_cards, "context": {"solutionsFound": 3}}}
        )
        with patch("solutionshub.cli.SolutionsApiClient") as mock_client:
            mock_client.return_value.ai_search = AsyncMock(return_value=response)
            result = runner.invoke(app, ["ai-search", "support agents", "-c", str(catalogue_file)])

        assert result.exit_code == 0
        assert "Mode: ai_result" in result.stdout
        assert "Found 3 relevant solutions" in result.stdout
        assert "3 solutions placed" in result.stdout

    def test_ai_failure(self, catalogue_file: Path) -> None:
        mock_instance = MagicMock()
        mock_instance.ai_search = AsyncMock(side_effect=AiSearchError("Network Error"))
        with patch("solutionshub.cli.SolutionsApiClient", return_value=mock_instance):
            result = runner.invoke(app, ["ai-search", "chatbot", "-c", str(catalogue_file)])

        assert result.exit_code == 0
        assert "Mode: idle" in result.stdout
        assert "Failed to search with AI agent" in result.stdout

    def test_empty_query(self) -> None:
        result = runner.invoke(app, ["ai-search", "   "])

        assert result.exit_code != 0


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_uvicorn(self) -> None:
        pytest.importorskip("uvicorn")
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["web", "--port", "9000"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[1]["port"] == 9000
