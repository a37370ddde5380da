"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from dineflow.menu import MenuManager
from dineflow.models import (
    BEVERAGE_CATEGORY,
    FOOD_CATEGORY,
    ORDER_STATUSES,
    BeverageEntry,
    FoodEntry,
    MenuEntry,
    OrderTicket,
)
from dineflow.orders import OrderManager
from dineflow.prompt_modal import PromptModal
from dineflow.rendering import (
    badge_style,
    format_menu_label,
    format_order_line,
    format_order_list,
    format_report,
    money,
    render_receipt,
)
from dineflow.reporting import build_sales_report, popular_items

logger = logging.getLogger(__name__)

MODE_CATEGORIES = {"F": FOOD_CATEGORY, "B": BEVERAGE_CATEGORY}
MAX_PRICE = 99999
MAX_ORDER_ID = 999999999


class DineFlowApp(App):
    """A Textual app for building table orders against the menu."""

    TITLE = "DineFlow"
    SUB_TITLE = "Food / Beverage"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #orders-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #search-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 5;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #draft-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #draft-totals {
        height: auto;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_mode = reactive("F")
    search_query = reactive("")
    selected_index = reactive(0)
    draft_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "register_selected", "Add item"),
        ("backspace", "backspace_query", "Delete query char"),
        ("ctrl+t", "toggle_selected_availability", "Toggle availability"),
        ("ctrl+u", "update_selected_price", "Update price"),
        ("ctrl+r", "remove_selected", "Remove item"),
        Binding("ctrl+s", "submit_order", "Submit order", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit active mode"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, menu: MenuManager, orders: OrderManager) -> None:
        super().__init__()
        self.menu = menu
        self.orders = orders
        self.draft_items: list[MenuEntry] = []
        self.draft_discount = 0
        self.draft_instructions = ""
        self.last_order_id: int | None = None
        # What the results pane shows outside search: "report", "orders", "receipt" or None.
        self.results_view: str | None = None
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="orders-pane"):
                yield Static("Draft Order", classes="pane-title")
                yield Static("(no items yet)", id="draft-list")
                yield Static(id="draft-totals")
            with Vertical(id="search-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        for store in (self.menu, self.orders):
            if store.last_error is not None:
                self.system_status = f"Warning: {store.last_error}"
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, PromptModal):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "active":
            self.search_query += event.character
            self.selected_index = 0
            self._refresh_search()
            event.stop()
            return

        key = event.character.lower()
        handlers = {
            "j": lambda: self._move_draft_selection(1),
            "k": lambda: self._move_draft_selection(-1),
            "d": self._delete_selected_draft_line,
            "x": self._prompt_discount,
            "i": self._prompt_instructions,
            "s": self._cycle_last_order_status,
            "e": self._export_last_receipt,
            "p": lambda: self._toggle_view("report"),
            "o": lambda: self._toggle_view("orders"),
            "g": self._prompt_open_order,
            "a": self._prompt_new_item,
        }
        if key in handlers:
            handlers[key]()
            event.stop()
            return

        if key.upper() not in MODE_CATEGORIES:
            return

        self.search_mode = key.upper()
        self.input_state = "active"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, PromptModal):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, PromptModal) or self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_register_selected(self) -> None:
        if isinstance(self.screen, PromptModal):
            return
        if self.input_state != "active":
            return

        item = self._selected_result()
        if item is None:
            return
        if not item.available:
            self.system_status = f"{item.name} is not available"
            self._refresh_search()
            return

        self.draft_items.append(item)
        self.draft_selected_index = len(self.draft_items) - 1
        self._refresh_draft()

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, PromptModal) or self.input_state != "active":
            return

        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_toggle_selected_availability(self) -> None:
        if isinstance(self.screen, PromptModal) or self.input_state != "active":
            return

        item = self._selected_result()
        if item is None:
            return
        self.menu.toggle_availability(item.name)
        self._report_store_error(self.menu)
        self._refresh_all()

    def action_update_selected_price(self) -> None:
        if isinstance(self.screen, PromptModal) or self.input_state != "active":
            return

        item = self._selected_result()
        if item is None:
            return
        self.push_screen(
            PromptModal(
                "Price",
                f"New base price for {item.name}",
                minimum=0,
                maximum=MAX_PRICE,
                decimal=True,
            ),
            lambda price: self._on_new_price(item.name, price),
        )

    def _on_new_price(self, name: str, price: int | float | str | None) -> None:
        if price is None:
            return
        self.menu.update_price(name, float(price))
        self.system_status = f"{name} now costs {money(float(price))}"
        self._report_store_error(self.menu)
        self._refresh_all()

    def action_remove_selected(self) -> None:
        if isinstance(self.screen, PromptModal) or self.input_state != "active":
            return

        item = self._selected_result()
        if item is None:
            return
        self.push_screen(
            PromptModal("Remove", f"Remove {item.name} from the menu? 1 = yes, 0 = no", minimum=0, maximum=1),
            lambda answer: self._on_remove_confirmed(item.name, answer),
        )

    def _on_remove_confirmed(self, name: str, answer: int | float | str | None) -> None:
        if not answer:
            return
        if self.menu.remove(name):
            self.system_status = f"{name} removed from the menu"
        self.selected_index = 0
        self._report_store_error(self.menu)
        self._refresh_all()

    def action_submit_order(self) -> None:
        if isinstance(self.screen, PromptModal):
            return
        if self.input_state != "normal":
            self.action_cancel_active_mode()
        if not self.draft_items:
            self.system_status = "Nothing to submit"
            self._refresh_search()
            return

        self._ask_sequence(
            [
                PromptModal("Table", "Enter a table number from 1 to 999", minimum=1, maximum=999),
                PromptModal("Customer", "Customer name (optional)", numeric=False, default="Guest"),
            ],
            lambda answers: self._submit_draft(int(answers[0]), str(answers[1])),
        )

    def _ask_sequence(
        self,
        prompts: list[PromptModal],
        on_done: Callable[[list[int | float | str]], None],
        answers: list[int | float | str] | None = None,
    ) -> None:
        """Show `prompts` one after another; Esc on any of them drops the whole sequence."""
        answers = answers or []
        if len(answers) == len(prompts):
            on_done(answers)
            return

        def collect(value: int | float | str | None) -> None:
            if value is None:
                return
            self._ask_sequence(prompts, on_done, [*answers, value])

        self.push_screen(prompts[len(answers)], collect)

    def _submit_draft(self, table_number: int, customer_name: str) -> None:
        order = self.orders.create_order(table_number, customer_name, self.draft_instructions)
        rejected = [item.name for item in self.draft_items if not order.add_entry(item)]
        if not order.items:
            self.system_status = "Order cancelled - no available items"
            self._refresh_search()
            return

        order.apply_discount(self.draft_discount)
        self.orders.add(order)
        self.last_order_id = order.order_id
        self.draft_items.clear()
        self.draft_discount = 0
        self.draft_instructions = ""
        self.draft_selected_index = None

        self.system_status = f"Order #{order.order_id} saved: {money(order.compute_total_with_tax())}"
        if rejected:
            logger.info("Order #%d skipped unavailable items: %s", order.order_id, ", ".join(rejected))
            self.system_status += f" (skipped: {', '.join(rejected)})"
        self._report_store_error(self.orders)
        self._refresh_all()

    def _prompt_discount(self) -> None:
        self.push_screen(
            PromptModal("Discount", "Discount percent from 0 to 100", minimum=0, maximum=100),
            self._on_discount,
        )

    def _on_discount(self, percent: int | float | str | None) -> None:
        if percent is None:
            return
        self.draft_discount = int(percent)
        self._refresh_draft()

    def _prompt_instructions(self) -> None:
        self.push_screen(
            PromptModal(
                "Special instructions",
                "Notes for the kitchen (leave empty to clear)",
                numeric=False,
                default="",
                max_length=120,
            ),
            self._on_instructions,
        )

    def _on_instructions(self, text: int | float | str | None) -> None:
        if text is None:
            return
        self.draft_instructions = str(text)
        self._refresh_draft()

    def _prompt_open_order(self) -> None:
        self.push_screen(
            PromptModal("Open order", "Order id", minimum=1, maximum=MAX_ORDER_ID),
            self._on_open_order,
        )

    def _on_open_order(self, order_id: int | float | str | None) -> None:
        if order_id is None:
            return
        order = self.orders.find_by_id(int(order_id))
        if order is None:
            self.system_status = f"Order #{order_id} not found"
            self._refresh_search()
            return

        self.last_order_id = order.order_id
        self.results_view = "receipt"
        self.system_status = f"Order #{order.order_id} is {order.status}"
        self._refresh_search()
        choices = ", ".join(f"{idx} {status}" for idx, status in enumerate(ORDER_STATUSES, start=1))
        self.push_screen(
            PromptModal(
                "Status",
                f"New status for #{order.order_id}: {choices}. Esc keeps {order.status}.",
                minimum=1,
                maximum=len(ORDER_STATUSES),
            ),
            lambda choice: self._on_status_choice(order.order_id, choice),
        )

    def _on_status_choice(self, order_id: int, choice: int | float | str | None) -> None:
        if choice is None:
            return
        status = ORDER_STATUSES[int(choice) - 1]
        if self.orders.update_status(order_id, status):
            self.system_status = f"Order #{order_id} is now {status}"
            self._report_store_error(self.orders)
        self._refresh_search()

    def _prompt_new_item(self) -> None:
        self.push_screen(
            PromptModal("New menu item", "1 = Food, 2 = Beverage", minimum=1, maximum=2),
            self._on_new_item_kind,
        )

    def _on_new_item_kind(self, kind: int | float | str | None) -> None:
        if kind is None:
            return

        prompts = [
            PromptModal("Name", "Item name", numeric=False),
            PromptModal("Base price", "Base price", minimum=0, maximum=MAX_PRICE, decimal=True),
        ]
        if kind == 1:
            prompts += [
                PromptModal("Dietary type", "VEG / NON-VEG / VEGAN", numeric=False, default="VEG"),
                PromptModal("Cuisine", "e.g. INDIAN, CONTINENTAL", numeric=False, default="INDIAN"),
                PromptModal("Preparation", "Minutes to prepare", minimum=0, maximum=999, default="15"),
                PromptModal("Spicy", "1 = spicy, 0 = not", minimum=0, maximum=1, default="0"),
            ]
            self._ask_sequence(prompts, self._add_food)
        else:
            prompts += [
                PromptModal("Serving size", "SMALL / MEDIUM / LARGE", numeric=False, default="SMALL"),
                PromptModal("Alcoholic", "1 = alcoholic, 0 = not", minimum=0, maximum=1, default="0"),
                PromptModal("Temperature", "HOT / COLD / ROOM", numeric=False, default="COLD"),
            ]
            self._ask_sequence(prompts, self._add_beverage)

    def _add_food(self, answers: list[int | float | str]) -> None:
        name, price, dietary, cuisine, minutes, spicy = answers
        self._add_menu_entry(
            FoodEntry(
                str(name),
                float(price),
                str(dietary).upper(),
                str(cuisine).upper(),
                int(minutes),
                bool(spicy),
            )
        )

    def _add_beverage(self, answers: list[int | float | str]) -> None:
        name, price, size, alcoholic, temperature = answers
        self._add_menu_entry(
            BeverageEntry(str(name), float(price), str(size).upper(), bool(alcoholic), str(temperature).upper())
        )

    def _add_menu_entry(self, item: MenuEntry) -> None:
        if not item.name:
            self.system_status = "A menu item needs a name"
        else:
            self.menu.add(item)
            self.system_status = f"Added {item.category.lower()} {item.name}"
            self._report_store_error(self.menu)
        self._refresh_search()

    def _cycle_last_order_status(self) -> None:
        order = self._last_order()
        if order is None:
            self.system_status = "No order to update"
        elif self.orders.update_status(order.order_id, order.next_status()):
            self.system_status = f"Order #{order.order_id} is now {order.status}"
            self._report_store_error(self.orders)
        self._refresh_all()

    def _export_last_receipt(self) -> None:
        order = self._last_order()
        if order is None:
            self.system_status = "No order to export"
        else:
            target = self.orders.export_receipt(order.order_id)
            self.system_status = f"Receipt written to {target}" if target else "Receipt export failed"
        self._refresh_search()

    def _toggle_view(self, view: str) -> None:
        self.results_view = None if self.results_view == view else view
        self._refresh_search()

    def _report_store_error(self, store: MenuManager | OrderManager) -> None:
        if store.last_error is not None:
            self.system_status = f"Not saved to disk: {store.last_error}"

    def _last_order(self) -> OrderTicket | None:
        if self.last_order_id is None:
            orders = self.orders.orders
            return orders[-1] if orders else None
        return self.orders.find_by_id(self.last_order_id)

    def _filtered_results(self) -> list[MenuEntry]:
        return self.menu.search(self.search_query, MODE_CATEGORIES[self.search_mode])

    def _selected_result(self) -> MenuEntry | None:
        results = self._filtered_results()
        if not results:
            return None
        if self.selected_index >= len(results):
            self.selected_index = 0
        return results[self.selected_index]

    def _refresh_all(self) -> None:
        self._refresh_draft()
        self._refresh_search()

    def _move_draft_selection(self, delta: int) -> None:
        if not self.draft_items:
            return

        if self.draft_selected_index is None:
            self.draft_selected_index = 0 if delta > 0 else len(self.draft_items) - 1
        else:
            self.draft_selected_index = (self.draft_selected_index + delta) % len(self.draft_items)
        self._refresh_draft()

    def _delete_selected_draft_line(self) -> None:
        if not self.draft_items or self.draft_selected_index is None:
            return

        idx = self.draft_selected_index
        if not (0 <= idx < len(self.draft_items)):
            self.draft_selected_index = None
            self._refresh_draft()
            return

        del self.draft_items[idx]

        if not self.draft_items:
            self.draft_selected_index = None
        else:
            self.draft_selected_index = min(idx, len(self.draft_items) - 1)

        self._refresh_draft()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_draft(self) -> None:
        try:
            draft_widget = self.query_one("#draft-list", Static)
            totals_widget = self.query_one("#draft-totals", Static)
        except NoMatches:
            return

        preview = OrderTicket(
            order_id=0,
            table_number=0,
            customer_name="",
            items=list(self.draft_items),
            discount_percent=self.draft_discount,
        )
        cgst, sgst = preview.tax_breakdown()
        totals = Text()
        totals.append(f"Subtotal: {money(preview.compute_total())}")
        if preview.discount_percent > 0:
            totals.append(f"   Discount {preview.discount_percent:g}%: -{money(preview.discount_amount())}")
        totals.append(f"\nTax: {money(cgst + sgst)}   ")
        totals.append(f"TOTAL: {money(preview.compute_total_with_tax())}", style="bold")
        if self.draft_instructions:
            totals.append(f"\nNotes: {self.draft_instructions}", style="italic")
        totals_widget.update(totals)

        if not self.draft_items:
            self.draft_selected_index = None
            draft_widget.update("(no items yet)")
            return

        if self.draft_selected_index is not None and self.draft_selected_index >= len(self.draft_items):
            self.draft_selected_index = len(self.draft_items) - 1

        visible_rows = self._visible_rows(draft_widget)
        start, end = self._window_bounds(len(self.draft_items), visible_rows, self.draft_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.draft_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_order_line(self.draft_items[idx]))

        if end < len(self.draft_items):
            lines.append("\n⋮", style="dim")

        draft_widget.update(lines)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            help_line = (
                "F/B search. A add item. X discount. I notes. Ctrl+S submit.\n"
                "S status. E export. G open order. O orders. P report."
            )
            bar.update(Text(f"{help_line}\n{status}"))
            return

        text = Text()
        text.append(self.search_mode, style=badge_style(MODE_CATEGORIES[self.search_mode]))
        text.append(f": {self.search_query}")
        bar.update(text)

    def _results_view_content(self) -> Text:
        if self.results_view == "report":
            report = build_sales_report(self.orders.orders)
            return format_report(report, popular_items(self.menu.items))
        if self.results_view == "orders":
            return format_order_list(self.orders.orders)
        if self.results_view == "receipt":
            order = self._last_order()
            if order is not None:
                return Text(render_receipt(order))
        return Text()

    def _refresh_results(self, results: list[MenuEntry]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update(self._results_view_content())
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_menu_label(results[idx]))

        if end < len(results):
            lines.append("\n⋮", style="dim")

        results_widget.update(lines)
