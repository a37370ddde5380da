"""Editable sample menu used to seed an empty catalog."""

from __future__ import annotations

SAMPLE_FOOD: list[dict[str, str | float | int | bool]] = [
    {"name": "Paneer Tikka", "base_price": 250.0, "dietary_type": "VEG", "cuisine": "INDIAN", "preparation_minutes": 20, "spicy": True},
    {"name": "Butter Chicken", "base_price": 320.0, "dietary_type": "NON-VEG", "cuisine": "INDIAN", "preparation_minutes": 25, "spicy": False},
    {"name": "Margherita Pizza", "base_price": 280.0, "dietary_type": "VEG", "cuisine": "ITALIAN", "preparation_minutes": 15, "spicy": False},
    {"name": "Hakka Noodles", "base_price": 180.0, "dietary_type": "VEG", "cuisine": "CHINESE", "preparation_minutes": 15, "spicy": True},
    {"name": "Grilled Salmon", "base_price": 450.0, "dietary_type": "NON-VEG", "cuisine": "CONTINENTAL", "preparation_minutes": 30, "spicy": False},
    {"name": "Dal Makhani", "base_price": 200.0, "dietary_type": "VEG", "cuisine": "INDIAN", "preparation_minutes": 20, "spicy": False},
]

SAMPLE_BEVERAGES: list[dict[str, str | float | bool]] = [
    {"name": "Cappuccino", "base_price": 120.0, "serving_size": "SMALL", "alcoholic": False, "temperature": "HOT"},
    {"name": "Fresh Lime Soda", "base_price": 80.0, "serving_size": "MEDIUM", "alcoholic": False, "temperature": "COLD"},
    {"name": "Mango Lassi", "base_price": 100.0, "serving_size": "LARGE", "alcoholic": False, "temperature": "COLD"},
    {"name": "Green Tea", "base_price": 60.0, "serving_size": "SMALL", "alcoholic": False, "temperature": "HOT"},
    {"name": "Cola", "base_price": 50.0, "serving_size": "SMALL", "alcoholic": False, "temperature": "COLD"},
]
