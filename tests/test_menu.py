from __future__ import annotations

import pytest

from dineflow.data import sample_menu
from dineflow.menu import MenuManager
from dineflow.models import BeverageEntry, FoodEntry


def test_seed_is_used_only_when_no_menu_file_exists(tmp_path, sample_items):
    path = tmp_path / "menu.db"
    first = MenuManager(path, seed=sample_items)
    assert [item.name for item in first] == ["Paneer Tikka", "Grilled Salmon", "Cola", "Mango Lassi"]
    assert path.exists()

    first.remove("Cola")
    reloaded = MenuManager(path, seed=sample_menu())
    assert [item.name for item in reloaded] == ["Paneer Tikka", "Grilled Salmon", "Mango Lassi"]


def test_without_seed_or_file_menu_starts_empty(tmp_path):
    menu = MenuManager(tmp_path / "menu.db")
    assert len(menu) == 0
    assert menu.find_by_name("anything") is None


def test_sample_menu_matches_house_catalog():
    items = sample_menu()
    assert len(items) == 11
    assert sum(1 for item in items if item.category == "Food") == 6
    assert items[-1] == BeverageEntry("Cola", 50.0, "SMALL", False, "COLD")


def test_find_is_case_insensitive_and_first_match(menu):
    duplicate = FoodEntry("cola", 999.0)
    menu.add(duplicate)
    found = menu.find_by_name("COLA")
    assert isinstance(found, BeverageEntry)
    assert found.base_price == 50.0


def test_add_appends_and_persists(tmp_path, menu):
    menu.add(BeverageEntry("Green Tea", 60.0, "SMALL", False, "HOT"))
    assert menu.items[-1].name == "Green Tea"
    reloaded = MenuManager(tmp_path / "menu.db")
    assert reloaded.items == menu.items


def test_update_price(tmp_path, menu):
    assert menu.update_price("paneer tikka", 275.0)
    assert menu.find_by_name("Paneer Tikka").base_price == 275.0
    assert MenuManager(tmp_path / "menu.db").find_by_name("Paneer Tikka").base_price == 275.0


def test_update_price_negative_leaves_price(menu):
    assert menu.update_price("Cola", -10.0) is True
    assert menu.find_by_name("Cola").base_price == 50.0


def test_update_price_not_found(menu):
    assert menu.update_price("Nope", 10.0) is False


def test_toggle_availability(tmp_path, menu):
    assert menu.toggle_availability("Cola")
    assert menu.find_by_name("Cola").available is False
    assert MenuManager(tmp_path / "menu.db").find_by_name("Cola").available is False
    assert menu.toggle_availability("Cola")
    assert menu.find_by_name("Cola").available is True
    assert menu.toggle_availability("Nope") is False


def test_remove_first_match_only(menu):
    menu.add(BeverageEntry("Cola", 70.0, "LARGE"))
    assert menu.remove("cola")
    remaining = menu.find_by_name("Cola")
    assert remaining.base_price == 70.0
    assert menu.remove("Nope") is False


def test_list_by_category_preserves_order(menu):
    assert [item.name for item in menu.list_by_category("food")] == ["Paneer Tikka", "Grilled Salmon"]
    assert [item.name for item in menu.list_by_category("Beverage")] == ["Cola", "Mango Lassi"]
    assert menu.list_by_category("Dessert") == []


def test_search_substring(menu):
    assert [item.name for item in menu.search("an")] == ["Paneer Tikka", "Mango Lassi"]
    assert [item.name for item in menu.search("an", "Beverage")] == ["Mango Lassi"]
    assert len(menu.search("  ")) == 4


def test_most_popular_is_stable_on_ties(menu):
    menu.find_by_name("Mango Lassi").popularity = 2
    menu.find_by_name("Grilled Salmon").popularity = 2
    ranked = [item.name for item in menu.most_popular(3)]
    assert ranked == ["Grilled Salmon", "Mango Lassi", "Paneer Tikka"]
    assert menu.most_popular(0) == []
    assert len(menu.most_popular(10)) == 4


def test_record_order_persists_popularity(tmp_path, menu):
    cola = menu.find_by_name("Cola")
    menu.record_order(cola)
    menu.record_order(cola)
    assert MenuManager(tmp_path / "menu.db").find_by_name("Cola").popularity == 2


def test_resolve_prefers_live_entry(menu):
    snapshot = BeverageEntry("Cola", 45.0)
    assert menu.resolve(snapshot) is menu.find_by_name("Cola")
    orphan = FoodEntry("Retired Dish", 10.0)
    assert menu.resolve(orphan) is orphan


def test_unreadable_menu_file_starts_empty(tmp_path, caplog):
    path = tmp_path / "menu.db"
    path.write_bytes(b"this is not a database" * 64)
    menu = MenuManager(path, seed=sample_menu())
    assert len(menu) == 0
    assert menu.last_error is not None
    assert "Starting with an empty menu" in caplog.text


def test_failed_save_keeps_in_memory_change(tmp_path):
    blocked = tmp_path / "menu.db"
    blocked.mkdir()
    menu = MenuManager(blocked)
    menu.add(FoodEntry("Dal", 200.0))
    assert menu.last_error is not None
    assert menu.find_by_name("Dal") is not None
    assert menu.update_price("Dal", 210.0)
    assert menu.find_by_name("Dal").base_price == pytest.approx(210.0)


def test_update_price_nan_leaves_price(menu):
    assert menu.update_price("Cola", float("nan")) is True
    assert menu.find_by_name("Cola").base_price == 50.0
