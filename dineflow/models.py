"""Domain models for dineflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from dineflow.config import (
    CGST_RATE,
    CONTINENTAL_MARKUP,
    CURRENCY_SYMBOL,
    SERVING_SIZE_MULTIPLIERS,
    SGST_RATE,
)

FOOD_CATEGORY = "Food"
BEVERAGE_CATEGORY = "Beverage"
CATEGORIES = (FOOD_CATEGORY, BEVERAGE_CATEGORY)

PENDING = "PENDING"
PREPARING = "PREPARING"
SERVED = "SERVED"
BILLED = "BILLED"
ORDER_STATUSES = (PENDING, PREPARING, SERVED, BILLED)


@dataclass(eq=True)
class FoodEntry:
    """A food item on the menu."""

    name: str
    base_price: float
    dietary_type: str = "VEG"
    cuisine: str = "INDIAN"
    preparation_minutes: int = 15
    spicy: bool = False
    available: bool = True
    popularity: int = 0

    @property
    def category(self) -> str:
        return FOOD_CATEGORY


@dataclass(eq=True)
class BeverageEntry:
    """A beverage item on the menu."""

    name: str
    base_price: float
    serving_size: str = "SMALL"
    alcoholic: bool = False
    temperature: str = "COLD"
    available: bool = True
    popularity: int = 0

    @property
    def category(self) -> str:
        return BEVERAGE_CATEGORY


MenuEntry = FoodEntry | BeverageEntry


def calculate_price(item: MenuEntry) -> float:
    """Return the effective sale price of a menu entry (unrounded)."""
    if isinstance(item, FoodEntry):
        if item.cuisine.upper() == "CONTINENTAL":
            return item.base_price * CONTINENTAL_MARKUP
        return item.base_price
    multiplier = SERVING_SIZE_MULTIPLIERS.get(item.serving_size.upper(), 1.0)
    return item.base_price * multiplier


def describe(item: MenuEntry) -> str:
    """One-line detail string for menu listings."""
    if isinstance(item, FoodEntry):
        text = (
            f"{item.name} | {item.dietary_type} | {item.cuisine} Cuisine | "
            f"Prep: {item.preparation_minutes} mins | {CURRENCY_SYMBOL}{item.base_price:.2f}"
        )
        if item.spicy:
            text += " | Spicy"
        return text
    kind = "Alcoholic" if item.alcoholic else "Non-Alcoholic"
    return (
        f"{item.name} | {item.serving_size} | {kind} | {item.temperature} | "
        f"{CURRENCY_SYMBOL}{calculate_price(item):.2f}"
    )


def variant_key(item: MenuEntry) -> tuple:
    """Identity of an entry beyond its name: variant plus the fields that never change in place."""
    if isinstance(item, FoodEntry):
        return (
            FOOD_CATEGORY,
            item.name.lower(),
            item.dietary_type,
            item.cuisine,
            item.preparation_minutes,
            item.spicy,
        )
    return (BEVERAGE_CATEGORY, item.name.lower(), item.serving_size, item.alcoholic, item.temperature)


def set_base_price(item: MenuEntry, new_price: float) -> bool:
    """Set a non-negative base price; negative or NaN values leave the price unchanged."""
    if not new_price >= 0:
        return False
    item.base_price = new_price
    return True


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderTicket:
    """One customer/table order holding shared references to catalog entries."""

    order_id: int
    table_number: int
    customer_name: str
    items: list[MenuEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)
    status: str = PENDING
    special_instructions: str = ""
    discount_percent: float = 0.0
    on_item_ordered: Callable[[MenuEntry], None] | None = field(default=None, repr=False, compare=False)

    def add_entry(self, item: MenuEntry | None) -> bool:
        """Append an available item and bump its popularity."""
        if item is None or not item.available:
            return False
        self.items.append(item)
        if self.on_item_ordered is not None:
            self.on_item_ordered(item)
        else:
            item.popularity += 1
        return True

    def remove_entry(self, name: str) -> bool:
        """Drop the first line matching name. Popularity is left as is."""
        wanted = name.lower()
        for idx, item in enumerate(self.items):
            if item.name.lower() == wanted:
                del self.items[idx]
                return True
        return False

    def apply_discount(self, percent: float) -> bool:
        if not (0 <= percent <= 100):
            return False
        self.discount_percent = percent
        return True

    def set_status(self, status: str) -> bool:
        """Any status may follow any other; only unknown values are rejected."""
        if status not in ORDER_STATUSES:
            return False
        self.status = status
        return True

    def next_status(self) -> str:
        idx = ORDER_STATUSES.index(self.status) if self.status in ORDER_STATUSES else -1
        return ORDER_STATUSES[(idx + 1) % len(ORDER_STATUSES)]

    def compute_total(self) -> float:
        return sum(calculate_price(item) for item in self.items)

    def discount_amount(self) -> float:
        return self.compute_total() * self.discount_percent / 100

    def discounted_subtotal(self) -> float:
        total = self.compute_total()
        return total - (total * self.discount_percent / 100)

    def tax_breakdown(self) -> tuple[float, float]:
        """Return (CGST, SGST), each charged on the discounted subtotal."""
        subtotal = self.discounted_subtotal()
        return (subtotal * CGST_RATE, subtotal * SGST_RATE)

    def compute_total_with_tax(self) -> float:
        cgst, sgst = self.tax_breakdown()
        return self.discounted_subtotal() + cgst + sgst
