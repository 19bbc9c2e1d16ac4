"""Unit tests for the bounded in-memory reading store."""

from __future__ import annotations

from threading import Thread

import pytest

from datastore.reading_store import ReadingStore, coerce_limit
from models.records import SensorReading


def _reading(index: int) -> SensorReading:
    return SensorReading(
        strain=float(index),
        vibration=0.0,
        displacement=0.0,
        acceleration=0.0,
        timestamp=f"2024-01-01, 00:00:{index % 60:02d}",
        id=str(1_700_000_000_000 + index),
    )


@pytest.mark.parametrize("count", [0, 1, 49, 50, 51, 120])
def test_read_all_keeps_last_inserts_newest_first(count: int) -> None:
    store = ReadingStore(capacity=50)
    inserted = [_reading(i) for i in range(count)]
    for reading in inserted:
        store.insert(reading)

    retained = store.read_all()

    assert len(retained) == min(count, 50)
    assert retained == list(reversed(inserted))[:50]


def test_insert_beyond_capacity_evicts_only_oldest() -> None:
    store = ReadingStore(capacity=50)
    inserted = [_reading(i) for i in range(51)]
    for reading in inserted:
        store.insert(reading)

    retained = store.read_all()

    assert inserted[0] not in retained
    assert all(reading in retained for reading in inserted[1:])
    assert retained[0] is inserted[-1]
    assert retained[-1] is inserted[1]


def test_read_recent_returns_prefix_of_read_all() -> None:
    store = ReadingStore(capacity=50)
    for i in range(30):
        store.insert(_reading(i))

    assert store.read_recent(5) == store.read_all()[:5]
    assert store.read_recent(100) == store.read_all()


@pytest.mark.parametrize(
    "limit", [None, 0, -3, "abc", "", "-2", "0.5", 0.4, float("nan"), True, object()]
)
def test_read_recent_falls_back_to_default_limit(limit) -> None:
    store = ReadingStore(capacity=50, default_limit=10)
    for i in range(30):
        store.insert(_reading(i))

    assert store.read_recent(limit) == store.read_all()[:10]


def test_read_recent_accepts_numeric_strings() -> None:
    store = ReadingStore(capacity=50)
    for i in range(30):
        store.insert(_reading(i))

    assert len(store.read_recent(" 20 ")) == 20
    assert len(store.read_recent(3.0)) == 3


def test_read_recent_does_not_expose_internal_sequence() -> None:
    store = ReadingStore()
    store.insert(_reading(1))

    snapshot = store.read_recent(5)
    snapshot.clear()

    assert len(store) == 1


def test_read_latest_empty_and_after_insert() -> None:
    store = ReadingStore()
    assert store.read_latest() is None

    reading = _reading(7)
    store.insert(reading)

    assert store.read_latest() is reading


def test_clear_empties_store() -> None:
    store = ReadingStore()
    store.insert(_reading(1))

    store.clear()

    assert len(store) == 0
    assert store.read_all() == []


def test_invalid_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        ReadingStore(capacity=0)


def test_concurrent_inserts_never_exceed_capacity() -> None:
    store = ReadingStore(capacity=50)

    def worker(offset: int) -> None:
        for i in range(200):
            store.insert(_reading(offset + i))

    threads = [Thread(target=worker, args=(n * 1000,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 50
    assert len(store.read_all()) == 50


def test_coerce_limit_values() -> None:
    assert coerce_limit("7", 10) == 7
    assert coerce_limit(12, 10) == 12
    assert coerce_limit("-1", 10) == 10
    assert coerce_limit("1.5", 10) == 1
    assert coerce_limit("20abc", 10) == 20
    assert coerce_limit(2.5, 10) == 2
    assert coerce_limit("abc20", 10) == 10
