from __future__ import annotations

from datetime import datetime, timezone

from dineflow.models import BeverageEntry, FoodEntry, OrderTicket
from dineflow.rendering import format_menu_label, format_order_list, format_report, money, render_receipt
from dineflow.reporting import build_sales_report


def _order(**kwargs) -> OrderTicket:
    return OrderTicket(
        order_id=1042,
        table_number=6,
        customer_name="Ananya",
        created_at=datetime(2026, 5, 4, 12, 0, tzinfo=timezone.utc),
        **kwargs,
    )


def test_money_rounds_to_two_places():
    assert money(94.5) == "₹94.50"
    assert money(1 / 3) == "₹0.33"


def test_receipt_numbers_match_totals():
    cola = BeverageEntry("Cola", 50.0)
    order = _order(items=[cola, cola], discount_percent=10)
    receipt = render_receipt(order)

    assert "ORDER ID: #1042 | TABLE: 6" in receipt
    assert "Customer: Ananya | Status: PENDING" in receipt
    assert "1. Cola" in receipt and "2. Cola" in receipt
    assert "Subtotal: ₹100.00" in receipt
    assert "Discount (10%): -₹10.00" in receipt
    assert "CGST (2.5%): ₹2.25" in receipt
    assert "SGST (2.5%): ₹2.25" in receipt
    assert "TOTAL: ₹94.50" in receipt
    assert "Special instructions" not in receipt


def test_receipt_without_discount_or_items():
    receipt = render_receipt(_order(special_instructions="Birthday candle"))
    assert "No items in order" in receipt
    assert "Discount" not in receipt
    assert "TOTAL: ₹0.00" in receipt
    assert "Special instructions:\nBirthday candle" in receipt


def test_receipt_uses_effective_price():
    salmon = FoodEntry("Grilled Salmon", 450.0, cuisine="CONTINENTAL")
    receipt = render_receipt(_order(items=[salmon]))
    assert "₹495.00" in receipt


def test_menu_label_marks_category():
    label = format_menu_label(BeverageEntry("Cola", 50.0))
    assert label.plain.startswith("B Cola | SMALL")


def test_report_text_hides_average_without_orders():
    text = format_report(build_sales_report([]), []).plain
    assert "Total Orders: 0" in text
    assert "Total Revenue: ₹0.00" in text
    assert "Average Order Value" not in text
    assert "Busiest tables" not in text


def test_order_list_shows_status_and_taxed_total():
    order = _order(items=[BeverageEntry("Cola", 100.0)], status="SERVED")
    plain = format_order_list([order]).plain
    assert "#1042" in plain
    assert "Ananya" in plain
    assert "SERVED" in plain
    assert money(105.0) in plain


def test_order_list_without_orders():
    assert format_order_list([]).plain == "No orders yet"
