"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from solutionshub.clients.api import DEFAULT_API_URL
from solutionshub.layout.allocator import SEARCH_SLOT_INDEX

API_URL_ENV = "SOLUTIONSHUB_API_URL"


def _get_default_api_url() -> str:
    return os.environ.get(API_URL_ENV) or DEFAULT_API_URL


def _get_default_catalogue_path() -> Path | None:
    """Use a local catalogue snapshot when one is checked out next to the app."""
    local = Path("data/catalogue.json")
    if local.exists():
        return local
    return None


@dataclass(slots=True)
class AppConfig:
    api_url: str | None = None
    catalogue_path: Path | None = None
    catalogue_limit: int = 100
    request_timeout: float = 10.0
    ai_timeout: float = 60.0
    reserved_index: int = SEARCH_SLOT_INDEX

    def __post_init__(self) -> None:
        if self.api_url is None:
            self.api_url = _get_default_api_url()
        if self.catalogue_path is None:
            self.catalogue_path = _get_default_catalogue_path()

    def resolve_catalogue_path(self, base_dir: Path | None = None) -> Path | None:
        if self.catalogue_path is None:
            return None
        if Path(self.catalogue_path).is_absolute() or base_dir is None:
            return Path(self.catalogue_path)
        return base_dir / self.catalogue_path
