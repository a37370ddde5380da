"""Menu catalog with write-through persistence."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, Iterator

from dineflow.config import MENU_DB_PATH
from dineflow.models import MenuEntry, set_base_price, variant_key
from dineflow.persistence import PersistenceError, load_menu, save_menu

logger = logging.getLogger(__name__)


class MenuManager:
    """Owns the menu entries.

    Names are matched case-insensitively and duplicates are allowed; every
    name-based operation acts on the first match in insertion order. Each
    mutation rewrites the menu file. A failed write is logged and kept on
    `last_error`, the in-memory change stays.
    """

    def __init__(self, path: Path = MENU_DB_PATH, seed: Iterable[MenuEntry] | None = None) -> None:
        self.path = Path(path)
        self.last_error: PersistenceError | None = None
        self._items: list[MenuEntry] = []
        self._lock = threading.RLock()
        self._load(seed)

    def _load(self, seed: Iterable[MenuEntry] | None) -> None:
        try:
            loaded = load_menu(self.path)
        except PersistenceError as exc:
            logger.warning("Starting with an empty menu: %s", exc)
            self.last_error = exc
            return

        if loaded is not None:
            self._items = loaded
            logger.info("Loaded %d menu items from %s", len(loaded), self.path)
            return

        if seed is not None:
            self._items = list(seed)
            logger.info("Seeded menu with %d sample items", len(self._items))
            self._persist()

    def _persist(self) -> bool:
        try:
            save_menu(self.path, self._items)
        except PersistenceError as exc:
            logger.warning("Menu change kept in memory only: %s", exc)
            self.last_error = exc
            return False
        self.last_error = None
        return True

    def _first_match(self, name: str) -> int | None:
        wanted = name.lower()
        for idx, item in enumerate(self._items):
            if item.name.lower() == wanted:
                return idx
        return None

    @property
    def items(self) -> list[MenuEntry]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[MenuEntry]:
        return iter(self.items)

    def add(self, item: MenuEntry) -> MenuEntry:
        with self._lock:
            self._items.append(item)
            self._persist()
        logger.info("Menu item added: %s", item.name)
        return item

    def find_by_name(self, name: str) -> MenuEntry | None:
        with self._lock:
            idx = self._first_match(name)
            return None if idx is None else self._items[idx]

    def update_price(self, name: str, new_price: float) -> bool:
        """Return False when no item matches; a negative or NaN price is ignored."""
        with self._lock:
            item = self.find_by_name(name)
            if item is None:
                logger.info("Price update skipped, item not found: %s", name)
                return False
            if not set_base_price(item, new_price):
                logger.warning("Rejected invalid price %r for %s", new_price, item.name)
            self._persist()
        return True

    def toggle_availability(self, name: str) -> bool:
        with self._lock:
            item = self.find_by_name(name)
            if item is None:
                return False
            item.available = not item.available
            self._persist()
        logger.info("%s is now %s", item.name, "available" if item.available else "unavailable")
        return True

    def remove(self, name: str) -> bool:
        with self._lock:
            idx = self._first_match(name)
            if idx is None:
                logger.info("Remove skipped, item not found: %s", name)
                return False
            removed = self._items.pop(idx)
            self._persist()
        logger.info("Removed from menu: %s", removed.name)
        return True

    def list_by_category(self, category: str) -> list[MenuEntry]:
        wanted = category.lower()
        with self._lock:
            return [item for item in self._items if item.category.lower() == wanted]

    def search(self, query: str, category: str | None = None) -> list[MenuEntry]:
        """Case-insensitive substring search, optionally within one category."""
        source = self.items if category is None else self.list_by_category(category)
        q = query.strip().lower()
        if not q:
            return source
        return [item for item in source if q in item.name.lower()]

    def most_popular(self, n: int) -> list[MenuEntry]:
        with self._lock:
            # sorted() is stable, so ties keep insertion order.
            ranked = sorted(self._items, key=lambda item: item.popularity, reverse=True)
        return ranked[: max(0, n)]

    def record_order(self, item: MenuEntry) -> None:
        """Count one more order of `item` and persist the new counter."""
        with self._lock:
            item.popularity += 1
            self._persist()

    def resolve(self, snapshot: MenuEntry) -> MenuEntry:
        """Map a stored order line onto the live entry it was taken from.

        With duplicate names the closest live entry wins: same variant fields
        and price, then same variant fields (the price may have changed since),
        then the first entry of that name. Without any match the stored
        snapshot is kept.
        """
        key = variant_key(snapshot)
        with self._lock:
            same_name = [item for item in self._items if item.name.lower() == snapshot.name.lower()]
        same_variant = [item for item in same_name if variant_key(item) == key]
        exact = [item for item in same_variant if item.base_price == snapshot.base_price]
        for candidates in (exact, same_variant, same_name):
            if candidates:
                return candidates[0]
        return snapshot
