from __future__ import annotations

import sqlite3

import pytest

from dineflow.models import BeverageEntry, FoodEntry, OrderTicket
from dineflow.persistence import PersistenceError, load_menu, load_orders, save_menu, save_orders, write_receipt


def test_menu_round_trip_keeps_variants_and_order(tmp_path):
    items = [
        BeverageEntry("Old Monk Cola", 240.0, "LARGE", True, "ROOM", available=False, popularity=4),
        FoodEntry("Chilli Paneer", 220.5, "VEG", "CHINESE", 12, spicy=True, popularity=7),
        FoodEntry("Chilli Paneer", 199.0, "VEGAN", "chinese", 10),
    ]
    save_menu(tmp_path / "menu.db", items)
    assert load_menu(tmp_path / "menu.db") == items


def test_snapshot_overwrites_previous_contents(tmp_path):
    path = tmp_path / "menu.db"
    save_menu(path, [FoodEntry("A", 1.0), FoodEntry("B", 2.0)])
    save_menu(path, [FoodEntry("C", 3.0)])
    assert [item.name for item in load_menu(path)] == ["C"]


def test_missing_menu_file_loads_as_none(tmp_path):
    assert load_menu(tmp_path / "absent.db") is None
    assert load_orders(tmp_path / "absent.db", lambda entry: entry) == []


def test_unknown_entry_kind_is_a_persistence_error(tmp_path):
    path = tmp_path / "menu.db"
    save_menu(path, [FoodEntry("A", 1.0)])
    conn = sqlite3.connect(path)
    with conn:
        conn.execute("UPDATE menu_items SET kind = 'dessert'")
    conn.close()
    with pytest.raises(PersistenceError):
        load_menu(path)


def test_orders_without_resolution_keep_denormalised_items(tmp_path):
    order = OrderTicket(1005, 2, "Dev", items=[BeverageEntry("Chai", 30.0, "MEDIUM", False, "HOT")], status="BILLED")
    save_orders(tmp_path / "orders.db", [order])
    assert load_orders(tmp_path / "orders.db", lambda entry: entry) == [order]


def test_write_receipt_is_utf8(tmp_path):
    target = write_receipt(tmp_path / "out", 1001, "TOTAL: ₹10.00\n")
    assert target.name == "receipt_1001.txt"
    assert target.read_bytes().decode("utf-8") == "TOTAL: ₹10.00\n"
