from __future__ import annotations

import pytest

from dineflow.menu import MenuManager
from dineflow.models import BeverageEntry, FoodEntry
from dineflow.orders import OrderManager
from dineflow.sequence import OrderIdSequence


@pytest.fixture
def sample_items():
    return [
        FoodEntry("Paneer Tikka", 250.0, "VEG", "INDIAN", 20, spicy=True),
        FoodEntry("Grilled Salmon", 450.0, "NON-VEG", "CONTINENTAL", 30),
        BeverageEntry("Cola", 50.0, "SMALL", False, "COLD"),
        BeverageEntry("Mango Lassi", 100.0, "LARGE", False, "COLD"),
    ]


@pytest.fixture
def menu(tmp_path, sample_items):
    return MenuManager(tmp_path / "menu.db", seed=sample_items)


@pytest.fixture
def sequence():
    return OrderIdSequence()


@pytest.fixture
def orders(tmp_path, menu, sequence):
    return OrderManager(menu, tmp_path / "orders.db", tmp_path / "receipts", sequence=sequence)
