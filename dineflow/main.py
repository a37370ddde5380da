"""Entry point for the DineFlow Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from dineflow.config import LOG_PATH, MENU_DB_PATH, ORDERS_DB_PATH, RECEIPT_DIR
from dineflow.data import sample_menu
from dineflow.menu import MenuManager
from dineflow.orders import OrderManager
from dineflow.receipt_app import DineFlowApp

logger = logging.getLogger(__name__)


def configure_logging(log_path: Path = LOG_PATH, level: int = logging.INFO) -> None:
    """Send log records to a file; the terminal belongs to the app."""
    handlers: list[logging.Handler] = []
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    except OSError:
        # Logging must never interfere with app flow.
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def build_app() -> DineFlowApp:
    menu = MenuManager(MENU_DB_PATH, seed=sample_menu())
    orders = OrderManager(menu, ORDERS_DB_PATH, RECEIPT_DIR)
    logger.info("DineFlow ready: %d menu items, %d orders", len(menu), len(orders))
    return DineFlowApp(menu, orders)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    build_app().run()


if __name__ == "__main__":
    main()
