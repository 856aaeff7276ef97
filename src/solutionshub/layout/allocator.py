"""Proximity-ordered placement of items around the reserved search slot."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Sequence

from solutionshub.models import FillerItem, Item, ScoredItem, SlotAssignment
from solutionshub.ranking.ranker import split_unmatched

LOGGER = logging.getLogger(__name__)

# Exactly one card precedes the search control.
SEARCH_SLOT_INDEX = 2


def slot_distance(slot_index: int, reserved_index: int = SEARCH_SLOT_INDEX) -> int:
    """Closeness of ``slot_index`` to the search control.

    Slots after the control rank one step closer than the slot equally far
    before it: ``distance(r - k) == k`` and ``distance(r + k) == k - 1``.
    """
    if slot_index == reserved_index:
        raise ValueError(f"Slot {slot_index} is reserved for the search control")
    if slot_index < reserved_index:
        return reserved_index - slot_index
    # -1 rather than +1 so the slot right after the control is filled first
    return slot_index - reserved_index - 1


def ordered_slots(total_slots: int, reserved_index: int = SEARCH_SLOT_INDEX) -> List[int]:
    """Non-reserved slot indices, closest to the search control first."""
    if total_slots < 0:
        raise ValueError(f"total_slots must be non-negative, got {total_slots}")
    indices = [index for index in range(total_slots) if index != reserved_index]
    # sort is stable and indices are ascending, so ties go to the lower index
    indices.sort(key=lambda index: slot_distance(index, reserved_index))
    return indices


def allocate(
    items: Iterable[Item],
    total_slots: int,
    *,
    reserved_index: int = SEARCH_SLOT_INDEX,
) -> SlotAssignment:
    """Assign ``items`` to slots by ascending distance, then fill the rest.

    Repeated ids are placed once. Items that do not fit are dropped.
    """
    slots: Dict[int, Item] = {}
    placed: set[str] = set()
    source = iter(items)
    dropped = 0

    for index in ordered_slots(total_slots, reserved_index):
        item = _next_unplaced(source, placed)
        if item is None:
            slots[index] = FillerItem.for_slot(index)
            continue
        placed.add(item.id)
        slots[index] = item

    for item in source:
        if item.id not in placed:
            dropped += 1
    if dropped:
        LOGGER.debug("%d items did not fit in %d slots", dropped, total_slots)

    return SlotAssignment(total_slots=total_slots, reserved_index=reserved_index, slots=slots)


def _next_unplaced(source: Iterator[Item], placed: set[str]) -> Item | None:
    for item in source:
        if item.id in placed:
            LOGGER.debug("Skipping duplicate item %s", item.id)
            continue
        return item
    return None


def arrange_matches(matches: Sequence[ScoredItem], catalogue: Sequence[Item]) -> List[Item]:
    """Ranked matches followed by the remaining catalogue items."""
    return [match.item for match in matches] + split_unmatched(matches, catalogue)
