"""Read-only sales and popularity aggregates."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from dineflow.config import POPULAR_ITEMS_LIMIT, TOP_TABLES_LIMIT
from dineflow.models import BILLED, MenuEntry, OrderTicket


@dataclass(frozen=True)
class SalesReport:
    """Aggregates over the order history, recomputed on every call."""

    total_orders: int
    total_revenue: float
    average_order_value: float | None
    billed_orders: int
    open_orders: int
    busiest_tables: list[tuple[int, int]] = field(default_factory=list)


def build_sales_report(orders: Iterable[OrderTicket], top_tables: int = TOP_TABLES_LIMIT) -> SalesReport:
    orders = list(orders)
    revenue = sum(order.compute_total_with_tax() for order in orders)
    billed = sum(1 for order in orders if order.status == BILLED)
    # Counter keeps first-seen order, and most_common() is stable on ties.
    tables = Counter(order.table_number for order in orders)
    return SalesReport(
        total_orders=len(orders),
        total_revenue=revenue,
        average_order_value=revenue / len(orders) if orders else None,
        billed_orders=billed,
        open_orders=len(orders) - billed,
        busiest_tables=tables.most_common(top_tables),
    )


def popular_items(catalog: Iterable[MenuEntry], n: int = POPULAR_ITEMS_LIMIT) -> list[MenuEntry]:
    """Top-n entries by popularity; never-ordered entries are left out."""
    ranked = sorted(catalog, key=lambda item: item.popularity, reverse=True)[: max(0, n)]
    return [item for item in ranked if item.popularity > 0]
