"""SQLite snapshot persistence for the menu and order history."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from dineflow.models import BeverageEntry, FoodEntry, MenuEntry, OrderTicket

_FOOD_KIND = "food"
_BEVERAGE_KIND = "beverage"

_ENTRY_COLUMNS = """
    kind TEXT NOT NULL,
    name TEXT NOT NULL,
    base_price REAL NOT NULL,
    available INTEGER NOT NULL,
    popularity INTEGER NOT NULL,
    dietary_type TEXT,
    cuisine TEXT,
    preparation_minutes INTEGER,
    spicy INTEGER,
    serving_size TEXT,
    alcoholic INTEGER,
    temperature TEXT
"""

_ENTRY_FIELDS = (
    "kind",
    "name",
    "base_price",
    "available",
    "popularity",
    "dietary_type",
    "cuisine",
    "preparation_minutes",
    "spicy",
    "serving_size",
    "alcoholic",
    "temperature",
)


class PersistenceError(Exception):
    """Reading or writing a snapshot file failed."""


def _connect(path: Path) -> sqlite3.Connection:
    db_file = Path(path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_menu_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        f"""
        CREATE TABLE IF NOT EXISTS menu_items (
            position INTEGER PRIMARY KEY,
            {_ENTRY_COLUMNS}
        );
        """
    )


def bootstrap_order_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        f"""
        CREATE TABLE IF NOT EXISTS orders (
            order_id INTEGER PRIMARY KEY,
            position INTEGER NOT NULL,
            table_number INTEGER NOT NULL,
            customer_name TEXT NOT NULL,
            created_at TEXT NOT NULL,
            status TEXT NOT NULL,
            special_instructions TEXT NOT NULL DEFAULT '',
            discount_percent REAL NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS order_items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            order_id INTEGER NOT NULL,
            line_index INTEGER NOT NULL,
            {_ENTRY_COLUMNS},
            FOREIGN KEY(order_id) REFERENCES orders(order_id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_order_items_order_id_line
            ON order_items(order_id, line_index);
        """
    )


def _entry_row(item: MenuEntry) -> tuple:
    if isinstance(item, FoodEntry):
        return (
            _FOOD_KIND,
            item.name,
            item.base_price,
            int(item.available),
            item.popularity,
            item.dietary_type,
            item.cuisine,
            item.preparation_minutes,
            int(item.spicy),
            None,
            None,
            None,
        )
    return (
        _BEVERAGE_KIND,
        item.name,
        item.base_price,
        int(item.available),
        item.popularity,
        None,
        None,
        None,
        None,
        item.serving_size,
        int(item.alcoholic),
        item.temperature,
    )


def entry_from_row(row: sqlite3.Row) -> MenuEntry:
    """Rebuild a menu entry from a stored row, keyed on the kind column."""
    kind = row["kind"]
    if kind == _FOOD_KIND:
        return FoodEntry(
            name=row["name"],
            base_price=float(row["base_price"]),
            dietary_type=row["dietary_type"],
            cuisine=row["cuisine"],
            preparation_minutes=int(row["preparation_minutes"]),
            spicy=bool(row["spicy"]),
            available=bool(row["available"]),
            popularity=int(row["popularity"]),
        )
    if kind == _BEVERAGE_KIND:
        return BeverageEntry(
            name=row["name"],
            base_price=float(row["base_price"]),
            serving_size=row["serving_size"],
            alcoholic=bool(row["alcoholic"]),
            temperature=row["temperature"],
            available=bool(row["available"]),
            popularity=int(row["popularity"]),
        )
    raise PersistenceError(f"Unknown menu entry kind: {kind!r}")


def save_menu(path: Path, items: Iterable[MenuEntry]) -> None:
    """Overwrite the menu file with a snapshot of all entries."""
    placeholders = ", ".join("?" for _ in _ENTRY_FIELDS)
    try:
        with _connect(path) as conn:
            bootstrap_menu_schema(conn)
            with conn:
                conn.execute("DELETE FROM menu_items")
                conn.executemany(
                    f"INSERT INTO menu_items (position, {', '.join(_ENTRY_FIELDS)}) VALUES (?, {placeholders})",
                    [(idx, *_entry_row(item)) for idx, item in enumerate(items)],
                )
    except (sqlite3.Error, OSError) as exc:
        raise PersistenceError(f"Could not save menu to {path}: {exc}") from exc


def load_menu(path: Path) -> list[MenuEntry] | None:
    """Load the menu snapshot; None when no menu file exists yet."""
    if not Path(path).exists():
        return None
    try:
        with _connect(path) as conn:
            bootstrap_menu_schema(conn)
            rows = conn.execute("SELECT * FROM menu_items ORDER BY position").fetchall()
            return [entry_from_row(row) for row in rows]
    except (sqlite3.Error, OSError, KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Could not load menu from {path}: {exc}") from exc


def save_orders(path: Path, orders: Iterable[OrderTicket]) -> None:
    """Overwrite the order file with a snapshot of the full order history."""
    placeholders = ", ".join("?" for _ in _ENTRY_FIELDS)
    try:
        with _connect(path) as conn:
            bootstrap_order_schema(conn)
            with conn:
                conn.execute("DELETE FROM order_items")
                conn.execute("DELETE FROM orders")
                for position, order in enumerate(orders):
                    conn.execute(
                        """
                        INSERT INTO orders (
                            order_id, position, table_number, customer_name,
                            created_at, status, special_instructions, discount_percent
                        )
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            order.order_id,
                            position,
                            order.table_number,
                            order.customer_name,
                            order.created_at.isoformat(),
                            order.status,
                            order.special_instructions,
                            order.discount_percent,
                        ),
                    )
                    conn.executemany(
                        f"""
                        INSERT INTO order_items (order_id, line_index, {', '.join(_ENTRY_FIELDS)})
                        VALUES (?, ?, {placeholders})
                        """,
                        [(order.order_id, idx, *_entry_row(item)) for idx, item in enumerate(order.items)],
                    )
    except (sqlite3.Error, OSError) as exc:
        raise PersistenceError(f"Could not save orders to {path}: {exc}") from exc


def load_orders(path: Path, resolve: Callable[[MenuEntry], MenuEntry]) -> list[OrderTicket]:
    """Load the order history.

    `resolve` maps each stored line (rebuilt from its denormalised row) to
    the entry the order should reference, normally the live catalog entry of
    the same name.
    """
    if not Path(path).exists():
        return []
    try:
        with _connect(path) as conn:
            bootstrap_order_schema(conn)
            order_rows = conn.execute("SELECT * FROM orders ORDER BY position").fetchall()
            item_rows = conn.execute("SELECT * FROM order_items ORDER BY order_id, line_index").fetchall()
            items_by_order: dict[int, list[MenuEntry]] = {}
            for row in item_rows:
                items_by_order.setdefault(int(row["order_id"]), []).append(resolve(entry_from_row(row)))
            return [
                OrderTicket(
                    order_id=int(row["order_id"]),
                    table_number=int(row["table_number"]),
                    customer_name=row["customer_name"],
                    items=items_by_order.get(int(row["order_id"]), []),
                    created_at=datetime.fromisoformat(row["created_at"]),
                    status=row["status"],
                    special_instructions=row["special_instructions"],
                    discount_percent=float(row["discount_percent"]),
                )
                for row in order_rows
            ]
    except (sqlite3.Error, OSError, KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Could not load orders from {path}: {exc}") from exc


def write_receipt(directory: Path, order_id: int, text: str) -> Path:
    """Write a rendered receipt to receipt_<order_id>.txt and return its path."""
    target = Path(directory) / f"receipt_{order_id}.txt"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Could not write receipt {target}: {exc}") from exc
    return target
