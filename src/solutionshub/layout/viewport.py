"""Estimate how many grid slots fill the visible area."""

from __future__ import annotations

import math

MIN_TOTAL_SLOTS = 60
VISIBLE_ROWS = 6
EXTRA_ROWS = 3
GRID_COLUMNS = 12
AVERAGE_ITEM_COLS = 2.5
MIN_ITEMS_PER_ROW = 4


def total_slots_for_viewport(height: float | None, width: float | None) -> int:
    """Return the slot count for a viewport of ``height`` x ``width`` pixels.

    This is an estimate that errs on the high side: a short grid leaves the
    viewport partly empty, extra slots only add scroll room.
    """
    if not height or not width or height <= 0 or width <= 0:
        return MIN_TOTAL_SLOTS

    row_height = height / VISIBLE_ROWS
    rows_needed = math.ceil(height / row_height) + EXTRA_ROWS

    average_item_width = width / GRID_COLUMNS * AVERAGE_ITEM_COLS
    items_per_row = max(MIN_ITEMS_PER_ROW, math.floor(width / average_item_width))

    return max(MIN_TOTAL_SLOTS, rows_needed * items_per_row)
