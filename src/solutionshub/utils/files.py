"""Utility helpers for working with catalogue snapshot files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from solutionshub.clients.api import solutions_to_items
from solutionshub.models import Item


def read_solutions(path: Path) -> List[Any]:
    """Read raw solution records from a JSON snapshot.

    Accepts a bare array, a ``{"solutions": [...]}`` object as returned by the
    catalogue endpoint, or the same object nested under ``data``.
    """
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict):
        payload = payload.get("solutions", payload.get("data", {}))
        if isinstance(payload, dict):
            payload = payload.get("solutions")
    if not isinstance(payload, list):
        raise ValueError(f"No solutions list found in {path}")
    return payload


def load_catalogue(path: Path) -> List[Item]:
    """Load a catalogue snapshot as grid items."""
    return solutions_to_items(read_solutions(path))
