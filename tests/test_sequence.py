from __future__ import annotations

import threading

from dineflow.sequence import OrderIdSequence


def test_first_id_is_one_above_floor():
    sequence = OrderIdSequence()
    assert sequence.next_id() == 1001
    assert sequence.next_id() == 1002


def test_seed_continues_after_highest_issued():
    sequence = OrderIdSequence()
    sequence.seed(1007)
    assert sequence.next_id() == 1008


def test_seed_never_drops_below_floor():
    sequence = OrderIdSequence()
    sequence.seed(12)
    assert sequence.next_id() == 1001
    sequence.seed(None)
    assert sequence.current == 1001


def test_reseed_never_moves_backwards():
    sequence = OrderIdSequence()
    sequence.seed(1007)
    assert sequence.next_id() == 1008
    sequence.seed(1003)
    assert sequence.next_id() == 1009
    sequence.seed(None)
    assert sequence.next_id() == 1010
    sequence.seed(1500)
    assert sequence.next_id() == 1501


def test_concurrent_ids_are_unique():
    sequence = OrderIdSequence()
    issued: list[int] = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = sequence.next_id()
            with lock:
                issued.append(value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(issued) == len(set(issued)) == 1600
    assert max(issued) == 2600
