from __future__ import annotations

import pytest

from dineflow.models import BILLED, SERVED, BeverageEntry, FoodEntry, OrderTicket
from dineflow.reporting import build_sales_report, popular_items


def _order(order_id: int, table: int, *items, status: str = "PENDING") -> OrderTicket:
    return OrderTicket(order_id, table, "Guest", items=list(items), status=status)


def test_report_without_orders():
    report = build_sales_report([])
    assert report.total_orders == 0
    assert report.total_revenue == 0
    assert report.average_order_value is None
    assert report.billed_orders == 0
    assert report.open_orders == 0
    assert report.busiest_tables == []


def test_report_aggregates():
    dal = FoodEntry("Dal", 200.0)
    cola = BeverageEntry("Cola", 50.0)
    orders = [
        _order(1001, 4, dal, status=BILLED),
        _order(1002, 2, cola, cola),
        _order(1003, 4, dal, cola, status=SERVED),
    ]
    report = build_sales_report(orders)
    assert report.total_orders == 3
    assert report.total_revenue == pytest.approx((200 + 100 + 250) * 1.05)
    assert report.average_order_value == pytest.approx(report.total_revenue / 3)
    assert report.billed_orders == 1
    assert report.open_orders == 2
    assert report.busiest_tables == [(4, 2), (2, 1)]


def test_busiest_tables_top_five_first_seen_on_ties():
    orders = [_order(1000 + idx, table) for idx, table in enumerate([9, 8, 7, 6, 5, 4, 8])]
    report = build_sales_report(orders)
    assert report.busiest_tables == [(8, 2), (9, 1), (7, 1), (6, 1), (5, 1)]


def test_popular_items_skip_unordered_entries():
    items = [
        FoodEntry("Dal", 200.0, popularity=0),
        BeverageEntry("Cola", 50.0, popularity=3),
        FoodEntry("Tikka", 250.0, popularity=1),
    ]
    assert [item.name for item in popular_items(items, 3)] == ["Cola", "Tikka"]
    assert [item.name for item in popular_items(items, 1)] == ["Cola"]
    assert popular_items([FoodEntry("Dal", 200.0)]) == []
