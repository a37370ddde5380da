"""Order history with write-through persistence and order id recovery."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dineflow.config import ORDERS_DB_PATH, RECEIPT_DIR
from dineflow.menu import MenuManager
from dineflow.models import OrderTicket
from dineflow.persistence import PersistenceError, load_orders, save_orders, write_receipt
from dineflow.rendering import render_receipt
from dineflow.sequence import ORDER_IDS, OrderIdSequence

logger = logging.getLogger(__name__)


class OrderManager:
    """Append-only order history.

    Loading never fails hard: an unreadable order file yields an empty
    history. The id sequence is re-seeded from the highest loaded order id.
    """

    def __init__(
        self,
        menu: MenuManager,
        path: Path = ORDERS_DB_PATH,
        receipt_dir: Path = RECEIPT_DIR,
        sequence: OrderIdSequence = ORDER_IDS,
    ) -> None:
        self.menu = menu
        self.path = Path(path)
        self.receipt_dir = Path(receipt_dir)
        self.sequence = sequence
        self.last_error: PersistenceError | None = None
        self._lock = threading.RLock()
        self._orders: list[OrderTicket] = self.load()
        self.sequence.seed(max((order.order_id for order in self._orders), default=None))

    def load(self) -> list[OrderTicket]:
        try:
            orders = load_orders(self.path, self.menu.resolve)
        except PersistenceError as exc:
            logger.warning("Starting with an empty order history: %s", exc)
            self.last_error = exc
            return []
        for order in orders:
            order.on_item_ordered = self.menu.record_order
        logger.info("Loaded %d orders from %s", len(orders), self.path)
        return orders

    def save(self) -> bool:
        with self._lock:
            try:
                save_orders(self.path, self._orders)
            except PersistenceError as exc:
                logger.warning("Order change kept in memory only: %s", exc)
                self.last_error = exc
                return False
            self.last_error = None
        return True

    @property
    def orders(self) -> list[OrderTicket]:
        with self._lock:
            return list(self._orders)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def create_order(self, table_number: int, customer_name: str, special_instructions: str = "") -> OrderTicket:
        """Start a PENDING ticket with the next order id. It is stored by `add`."""
        return OrderTicket(
            order_id=self.sequence.next_id(),
            table_number=table_number,
            customer_name=customer_name,
            special_instructions=special_instructions,
            on_item_ordered=self.menu.record_order,
        )

    def add(self, order: OrderTicket) -> OrderTicket:
        with self._lock:
            self._orders.append(order)
            self.save()
        logger.info("Order #%d stored for table %d", order.order_id, order.table_number)
        return order

    def find_by_id(self, order_id: int) -> OrderTicket | None:
        with self._lock:
            for order in self._orders:
                if order.order_id == order_id:
                    return order
        return None

    def update_status(self, order_id: int, status: str) -> bool:
        with self._lock:
            order = self.find_by_id(order_id)
            if order is None:
                logger.info("Status update skipped, order not found: %d", order_id)
                return False
            if not order.set_status(status):
                logger.warning("Rejected unknown status %r for order #%d", status, order_id)
                return False
            self.save()
        logger.info("Order #%d status updated to %s", order_id, status)
        return True

    def export_receipt(self, order_id: int) -> Path | None:
        """Write the order's receipt to receipt_<order_id>.txt; None on failure."""
        order = self.find_by_id(order_id)
        if order is None:
            return None
        try:
            target = write_receipt(self.receipt_dir, order.order_id, render_receipt(order))
        except PersistenceError as exc:
            logger.warning("Receipt export failed: %s", exc)
            self.last_error = exc
            return None
        logger.info("Receipt for order #%d written to %s", order.order_id, target)
        return target
