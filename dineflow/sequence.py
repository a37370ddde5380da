"""Process-wide order id sequence."""

from __future__ import annotations

import threading

from dineflow.config import ORDER_ID_FLOOR


class OrderIdSequence:
    """Pre-incrementing order id counter.

    The counter starts at `floor` and is re-seeded from the highest persisted
    order id on startup, so the next id is always one above anything already
    issued.
    """

    def __init__(self, floor: int = ORDER_ID_FLOOR) -> None:
        self.floor = floor
        self._current = floor
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def seed(self, highest_issued: int | None) -> None:
        """Continue after `highest_issued`.

        The counter never moves backwards, so ids handed out earlier in this
        process are not issued again, and it never drops below the floor.
        """
        with self._lock:
            self._current = max(self._current, self.floor, highest_issued or self.floor)

    def next_id(self) -> int:
        with self._lock:
            self._current += 1
            return self._current


ORDER_IDS = OrderIdSequence()
