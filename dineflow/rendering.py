"""Receipt, menu row and report rendering helpers."""

from __future__ import annotations

from rich.text import Text

from dineflow.config import CGST_RATE, CURRENCY_SYMBOL, SGST_RATE
from dineflow.models import BEVERAGE_CATEGORY, BILLED, SERVED, MenuEntry, OrderTicket, calculate_price, describe
from dineflow.reporting import SalesReport

_RECEIPT_WIDTH = 60


def money(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:.2f}"


def _percent(rate: float) -> str:
    return f"{rate * 100:g}%"


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    if category == BEVERAGE_CATEGORY:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def category_badge(category: str) -> str:
    return category[:1].upper()


def format_menu_label(item: MenuEntry) -> Text:
    """Render a menu row with a colored category tag and availability mark."""
    text = Text()
    text.append(category_badge(item.category), style=badge_style(item.category))
    text.append(" ")
    if item.available:
        text.append(describe(item))
    else:
        text.append(describe(item), style="dim strike")
    return text


def format_order_line(item: MenuEntry) -> Text:
    text = Text()
    text.append(category_badge(item.category), style=badge_style(item.category))
    text.append(f" {item.name}  {money(calculate_price(item))}")
    if not item.available:
        text.append("  (unavailable)", style="dim")
    return text


def render_receipt(order: OrderTicket) -> str:
    """Plain-text receipt; amounts are the computed totals rounded to 2 places."""
    rule = "=" * _RECEIPT_WIDTH
    thin_rule = "-" * _RECEIPT_WIDTH
    lines = [
        rule,
        f"ORDER ID: #{order.order_id} | TABLE: {order.table_number}",
        f"Customer: {order.customer_name} | Status: {order.status}",
        f"Time: {order.created_at.isoformat(timespec='seconds')}",
        rule,
    ]
    if not order.items:
        lines.append("No items in order")
    for idx, item in enumerate(order.items, start=1):
        lines.append(f"{idx}. {item.name:<40} {money(calculate_price(item)):>12}")

    cgst, sgst = order.tax_breakdown()
    lines.append(thin_rule)
    lines.append(f"Subtotal: {money(order.compute_total())}")
    if order.discount_percent > 0:
        lines.append(f"Discount ({order.discount_percent:g}%): -{money(order.discount_amount())}")
    lines.append(f"CGST ({_percent(CGST_RATE)}): {money(cgst)}")
    lines.append(f"SGST ({_percent(SGST_RATE)}): {money(sgst)}")
    lines.append(f"TOTAL: {money(order.compute_total_with_tax())}")
    if order.special_instructions.strip():
        lines.append(thin_rule)
        lines.append("Special instructions:")
        lines.append(order.special_instructions.strip())
    lines.append(rule)
    return "\n".join(lines) + "\n"


def status_style(status: str) -> str:
    if status == BILLED:
        return "dim"
    if status == SERVED:
        return "green"
    return "bold yellow"


def format_order_list(orders: list[OrderTicket]) -> Text:
    """One row per order, newest last: id, table, customer, status and total."""
    text = Text()
    if not orders:
        text.append("No orders yet", style="dim")
        return text
    for idx, order in enumerate(orders):
        if idx:
            text.append("\n")
        text.append(f"#{order.order_id}  T{order.table_number:<3} {order.customer_name:<14} ")
        text.append(f"{order.status:<9}", style=status_style(order.status))
        text.append(f" {len(order.items)} items  {money(order.compute_total_with_tax())}")
    return text


def format_report(report: SalesReport, popular: list[MenuEntry]) -> Text:
    """Render the sales report and popularity ranking for the report pane."""
    text = Text()
    text.append("REPORTS & ANALYTICS\n", style="bold")
    text.append(f"Total Orders: {report.total_orders}\n")
    text.append(f"Total Revenue: {money(report.total_revenue)}\n")
    if report.average_order_value is not None:
        text.append(f"Average Order Value: {money(report.average_order_value)}\n")
    text.append(f"Billed: {report.billed_orders} | Open: {report.open_orders}\n")

    if report.busiest_tables:
        text.append("\nBusiest tables\n", style="bold")
        for table_number, count in report.busiest_tables:
            text.append(f"  Table {table_number}: {count} orders\n")

    if popular:
        text.append("\nMost popular\n", style="bold")
        for rank, item in enumerate(popular, start=1):
            text.append(f"  {rank}. {item.name} ({item.popularity})\n")
    return text
