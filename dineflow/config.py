"""Runtime configuration defaults for persistence, billing and logging."""

from __future__ import annotations

import os
from pathlib import Path

_DATA_DIR_ENV = "DINEFLOW_DATA_DIR"
_RECEIPT_DIR_ENV = "DINEFLOW_RECEIPT_DIR"
_LOG_PATH_ENV = "DINEFLOW_LOG_PATH"

DATA_DIR = Path(os.environ.get(_DATA_DIR_ENV, "").strip() or "data")
MENU_DB_PATH = DATA_DIR / "menu.db"
ORDERS_DB_PATH = DATA_DIR / "orders.db"
RECEIPT_DIR = Path(os.environ.get(_RECEIPT_DIR_ENV, "").strip() or "receipts")
LOG_PATH = Path(os.environ.get(_LOG_PATH_ENV, "").strip() or "/tmp/dineflow.log")

# First generated order id is ORDER_ID_FLOOR + 1.
ORDER_ID_FLOOR = 1000

CGST_RATE = 0.025
SGST_RATE = 0.025
CONTINENTAL_MARKUP = 1.10
SERVING_SIZE_MULTIPLIERS: dict[str, float] = {
    "SMALL": 1.00,
    "MEDIUM": 1.25,
    "LARGE": 1.50,
}

CURRENCY_SYMBOL = "₹"
TOP_TABLES_LIMIT = 5
POPULAR_ITEMS_LIMIT = 5
