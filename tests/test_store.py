# tests/test_store.py
import threading

import pytest

from app.database import SEED_PRODUCTS, ProductStore


def test_seeded_store_is_independent_of_seed_data():
    store = ProductStore.seeded()
    store.update(1, {"price": 1})
    assert SEED_PRODUCTS[0]["price"] == 800
    assert ProductStore.seeded().get(1)["price"] == 800


def test_insert_appends_in_order():
    store = ProductStore()
    a = store.insert({"name": "A", "price": 1})
    b = store.insert({"name": "B", "price": 2})
    assert (a["id"], b["id"]) == (1, 2)
    assert store.all() == [a, b]


def test_body_id_takes_precedence_on_insert():
    store = ProductStore.seeded()
    product = store.insert({"id": 77, "name": "X", "price": 5})
    assert product["id"] == 77
    assert store.get(77) is product


def test_update_merges_in_place():
    store = ProductStore.seeded()
    original = store.get(2)
    updated = store.update(2, {"price": 1400, "stock": 3})
    assert updated is original
    assert updated == {"id": 2, "name": "Laptop", "price": 1400, "stock": 3}
    assert store.update(99, {"price": 1}) is None


def test_delete_preserves_order_of_rest():
    store = ProductStore([{"id": i, "name": str(i), "price": i} for i in range(1, 5)])
    assert store.delete(2) is True
    assert [p["id"] for p in store.all()] == [1, 3, 4]
    assert store.delete(2) is False
    assert store.delete(None) is False


def test_lookup_does_not_match_booleans():
    store = ProductStore([{"id": True, "name": "odd", "price": 1}])
    assert store.get(1) is None


def test_length_strategy_reuses_ids():
    store = ProductStore.seeded("length")
    store.delete(1)
    assert store.insert({"name": "T", "price": 3})["id"] == 2


def test_monotonic_strategy_never_reuses_ids():
    store = ProductStore.seeded("monotonic")
    store.delete(2)
    assert store.insert({"name": "T", "price": 3})["id"] == 3
    store.delete(3)
    assert store.insert({"name": "U", "price": 4})["id"] == 4
    store.update(4, {"id": 10})
    assert store.insert({"name": "V", "price": 5})["id"] == 11


def test_unknown_strategy():
    with pytest.raises(ValueError):
        ProductStore(id_strategy="random")


def test_concurrent_inserts_get_distinct_ids():
    store = ProductStore(id_strategy="monotonic")

    def worker():
        for _ in range(50):
            store.insert({"name": "n", "price": 1})

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [p["id"] for p in store.all()]
    assert len(ids) == 400
    assert len(set(ids)) == 400
