"""Shared fixtures: sample catalogue records, items and snapshot files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from solutionshub.clients.api import solutions_to_items
from solutionshub.models import Item

SOLUTIONS: List[Dict[str, Any]] = [
    {"_id": "doc-parser", "title": "Document Parser", "description": "Extracts fields from invoices", "category": "Automation"},
    {"_id": "fraud", "title": "Fraud Detector", "description": "Flags suspicious payments", "category": "Finance"},
    {"_id": "vision", "title": "Vision Analytics Platform", "description": "Counts shoppers in stores", "category": "Computer Vision"},
    {"_id": "voice", "title": "Voice Assistant", "description": "Speech recognition for kiosks", "category": "NLP"},
    {"_id": "forecast", "title": "Demand Forecaster", "description": "Predicts weekly sales", "category": "Retail"},
    {"_id": "chatbot", "title": "Chatbot", "description": "Answers customer questions around the clock", "category": "Customer Service"},
    {"_id": "resume", "title": "Resume Screener", "description": "Shortlists job applicants", "category": "HR"},
    {"_id": "imaging", "title": "Medical Imaging Suite", "description": "Reads radiology scans", "category": "Healthcare"},
    {"_id": "contracts", "title": "Contract Reviewer", "description": "Highlights risky clauses", "category": "Legal"},
    {"_id": "routes", "title": "Route Optimizer", "description": "Plans delivery rounds", "category": "Logistics"},
]


@pytest.fixture
def solutions() -> List[Dict[str, Any]]:
    """Raw catalogue records as returned by the solutions endpoint."""
    return [dict(record) for record in SOLUTIONS]


@pytest.fixture
def catalogue(solutions: List[Dict[str, Any]]) -> List[Item]:
    """Ten catalogue items, the sixth titled exactly "Chatbot"."""
    return solutions_to_items(solutions)


@pytest.fixture
def catalogue_file(tmp_path: Path, solutions: List[Dict[str, Any]]) -> Path:
    """Catalogue snapshot in the catalogue endpoint's response shape."""
    path = tmp_path / "catalogue.json"
    path.write_text(json.dumps({"success": True, "solutions": solutions}), encoding="utf-8")
    return path


@pytest.fixture
def ai_cards() -> List[Dict[str, Any]]:
    """Three AI result cards, in the order the agent returned them."""
    return [
        {"id": "ai-a", "title": "Agent A", "shortDescription": "First", "category": "Support"},
        {"id": "ai-b", "title": "Agent B", "shortDescription": "Second", "category": "Support"},
        {"id": "ai-c", "title": "Agent C", "shortDescription": "Third", "category": "Sales"},
    ]
