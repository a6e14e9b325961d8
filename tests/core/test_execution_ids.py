# tests/core/test_execution_ids.py
"""Testes do serviço de identificadores de execução."""

import threading

from dagflow.core.ids import new_execution_id, next_id


def test_ids_are_prefixed_and_unique():
    first = new_execution_id("test_kind")
    second = new_execution_id("test_kind")

    assert first.startswith("test_kind_")
    assert first != second


def test_counters_are_independent_per_kind():
    a = next_id("kind_a_counter")
    b = next_id("kind_b_counter")

    assert a == 1
    assert b == 1
    assert next_id("kind_a_counter") == 2


def test_ids_are_unique_across_threads():
    seen = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = new_execution_id("threaded")
            with lock:
                seen.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == len(set(seen)) == 800
