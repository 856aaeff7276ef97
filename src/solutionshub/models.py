"""Core SolutionsHub data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Tuple

MAX_ITEM_COLS = 4

# Repeating footprint table; the same index always yields the same cell shape.
GRID_PATTERNS: Tuple[Tuple[int, int], ...] = (
    (2, 1), (2, 1), (3, 1), (2, 2), (4, 1),
    (2, 1), (3, 2), (2, 1), (2, 1), (4, 1),
    (2, 1), (2, 1), (3, 1), (2, 2), (2, 1),
    (4, 1), (2, 1), (3, 1), (2, 1), (3, 2),
    (2, 1), (4, 1), (2, 2), (2, 1), (3, 1),
    (2, 1), (4, 1), (2, 1), (3, 2), (2, 1),
)

FILLER_PREFIX = "placeholder-"


def grid_dimensions(index: int) -> tuple[int, int]:
    """Return the ``(cols, rows)`` footprint for a position in a source list."""
    return GRID_PATTERNS[index % len(GRID_PATTERNS)]


@dataclass(frozen=True, slots=True)
class Item:
    """A solution card placed in the grid."""

    id: str
    title: str
    description: str = ""
    category: str | None = None
    cols: int = 2
    rows: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "cols", max(1, min(int(self.cols), MAX_ITEM_COLS)))
        object.__setattr__(self, "rows", max(1, int(self.rows)))

    @property
    def is_filler(self) -> bool:
        return isinstance(self, FillerItem)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "cols": self.cols,
            "rows": self.rows,
            "filler": self.is_filler,
        }


@dataclass(frozen=True, slots=True)
class FillerItem(Item):
    """Blank card that keeps the dense grid free of holes."""

    @classmethod
    def for_slot(cls, slot_index: int) -> FillerItem:
        cols, rows = grid_dimensions(slot_index)
        return cls(id=f"{FILLER_PREFIX}{slot_index}", title="", description="", cols=cols, rows=rows)


@dataclass(frozen=True, slots=True)
class ScoredItem:
    """Item paired with its relevance score."""

    item: Item
    score: int


class SearchMode(str, Enum):
    IDLE = "idle"
    LOCAL_MATCH = "local_match"
    NO_LOCAL_MATCH = "no_local_match"
    AI_LOADING = "ai_loading"
    AI_RESULT = "ai_result"
    AI_EMPTY = "ai_empty"

    @property
    def is_ai(self) -> bool:
        return self in (SearchMode.AI_LOADING, SearchMode.AI_RESULT, SearchMode.AI_EMPTY)


@dataclass(frozen=True, slots=True)
class SlotAssignment:
    """Total mapping of grid slots to items, excluding the reserved search slot."""

    total_slots: int
    reserved_index: int
    slots: Mapping[int, Item] = field(default_factory=dict)

    def __getitem__(self, slot_index: int) -> Item:
        return self.slots[slot_index]

    def __contains__(self, slot_index: object) -> bool:
        return slot_index in self.slots

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[tuple[int, Item]]:
        for index in sorted(self.slots):
            yield index, self.slots[index]

    def items(self) -> list[Item]:
        """Non-filler items in slot index order."""
        return [item for _, item in self if not item.is_filler]

    def slot_of(self, item_id: str) -> int | None:
        for index, item in self.slots.items():
            if item.id == item_id:
                return index
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_slots": self.total_slots,
            "reserved_index": self.reserved_index,
            "slots": [{"index": index, **item.to_dict()} for index, item in self],
        }
