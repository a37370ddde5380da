"""Static sample menu data."""

from __future__ import annotations

from dineflow.constant import SAMPLE_BEVERAGES, SAMPLE_FOOD
from dineflow.models import BeverageEntry, FoodEntry, MenuEntry


def sample_menu() -> list[MenuEntry]:
    """Build fresh sample entries; callers own the returned objects."""
    items: list[MenuEntry] = [FoodEntry(**raw) for raw in SAMPLE_FOOD]  # type: ignore[arg-type]
    items.extend(BeverageEntry(**raw) for raw in SAMPLE_BEVERAGES)  # type: ignore[arg-type]
    return items
