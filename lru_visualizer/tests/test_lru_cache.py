

import random

import pytest

from lru_visualizer.modules.lru_cache import InvalidCapacity, LRUCache


def _keys(cache):
    return [e.key for e in cache.snapshot()]


def test_scenario_capacity_two():
    cache = LRUCache(2)
    assert cache.put("A", 1) == 1
    assert list(cache.snapshot()) == [("A", 1, True, True)]

    assert cache.put("B", 2) == 2
    assert list(cache.snapshot()) == [("A", 1, True, False), ("B", 2, False, True)]

    value, found = cache.get("A")
    assert found is True and value == 1
    assert list(cache.snapshot()) == [("B", 2, True, False), ("A", 1, False, True)]

    assert cache.put("C", 3) == 2
    assert list(cache.snapshot()) == [("A", 1, True, False), ("C", 3, False, True)]

    value, found = cache.get("B")
    assert found is False and value is None
    assert cache.misses == 1
    assert cache.hits == 1


@pytest.mark.parametrize("capacity", [0, -1, -10, 1.5, "3", True, None])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(InvalidCapacity):
        LRUCache(capacity)


def test_invalid_capacity_is_value_error():
    with pytest.raises(ValueError):
        LRUCache(0)


def test_reset_clears_everything_and_replaces_capacity():
    cache = LRUCache(2)
    cache.put("A", 1)
    cache.get("A")
    cache.get("Z")
    cache.reset(3)
    assert cache.size() == 0
    assert cache.hits == 0 and cache.misses == 0
    assert cache.capacity == 3
    assert list(cache.snapshot()) == []
    for k in "ABC":
        cache.put(k, k)
    assert _keys(cache) == ["A", "B", "C"]


def test_reset_without_capacity_keeps_old_one():
    cache = LRUCache(4)
    cache.put("A", 1)
    cache.reset()
    assert cache.capacity == 4
    assert len(cache) == 0


def test_reset_with_bad_capacity_leaves_cache_intact():
    cache = LRUCache(2)
    cache.put("A", 1)
    with pytest.raises(InvalidCapacity):
        cache.reset(0)
    assert cache.capacity == 2
    assert _keys(cache) == ["A"]


def test_overwrite_does_not_grow_or_evict():
    cache = LRUCache(2)
    cache.put("A", 1)
    cache.put("B", 2)
    assert cache.put("A", 10) == 2
    assert list(cache.snapshot()) == [("B", 2, True, False), ("A", 10, False, True)]


def test_miss_leaves_order_untouched():
    cache = LRUCache(3)
    for k in "ABC":
        cache.put(k, k)
    before = list(cache.snapshot())
    cache.get("X")
    assert list(cache.snapshot()) == before


def test_contains_and_peeks_do_not_touch_recency_or_counters():
    cache = LRUCache(3)
    assert cache.lru_key() is None and cache.mru_key() is None
    cache.put("A", 1)
    cache.put("B", 2)
    assert "A" in cache
    assert "Z" not in cache
    assert cache.lru_key() == "A"
    assert cache.mru_key() == "B"
    assert _keys(cache) == ["A", "B"]
    assert cache.hits == 0 and cache.misses == 0


def test_snapshot_is_restartable_and_idempotent():
    cache = LRUCache(3)
    cache.put("A", 1)
    cache.put("B", 2)
    snap = cache.snapshot()
    assert list(snap) == list(snap)
    assert len(snap) == 2
    assert list(cache.snapshot()) == list(cache.snapshot())


def test_snapshot_does_not_change_counters():
    cache = LRUCache(2)
    cache.put("A", 1)
    list(cache.snapshot())
    assert cache.hits == 0 and cache.misses == 0


def test_stale_snapshot_raises():
    cache = LRUCache(2)
    cache.put("A", 1)
    cache.put("B", 2)
    snap = cache.snapshot()
    cache.get("A")
    with pytest.raises(RuntimeError):
        list(snap)


def test_mutation_during_iteration_raises():
    cache = LRUCache(3)
    for k in "ABC":
        cache.put(k, k)
    it = iter(cache.snapshot())
    next(it)
    cache.put("D", "D")
    with pytest.raises(RuntimeError):
        next(it)


def test_get_on_mru_keeps_snapshot_valid():
    cache = LRUCache(2)
    cache.put("A", 1)
    snap = cache.snapshot()
    cache.get("A")
    assert list(snap) == [("A", 1, True, True)]


def test_empty_snapshot():
    cache = LRUCache(1)
    assert list(cache.snapshot()) == []


def test_eviction_counts_entries_not_value_size():
    cache = LRUCache(2)
    cache.put("A", "x" * 10_000)
    cache.put("B", "")
    cache.put("C", "y")
    assert _keys(cache) == ["B", "C"]


def test_stats_hit_ratio():
    cache = LRUCache(2)
    assert cache.stats()["hit_ratio"] == 0.0
    cache.put("A", 1)
    cache.get("A")
    cache.get("B")
    stats = cache.stats()
    assert stats == {"capacity": 2, "size": 1, "hits": 1, "misses": 1, "hit_ratio": 0.5}


def test_random_operations_hold_invariants():
    rng = random.Random(7)
    capacity = 4
    cache = LRUCache(capacity)
    # plain list model: index 0 is LRU
    model = []
    values = {}
    hits = misses = 0
    for _ in range(2000):
        key = rng.choice("ABCDEFGH")
        prev_hits, prev_misses = cache.hits, cache.misses
        if rng.random() < 0.5:
            value = rng.randint(0, 100)
            size_before = len(cache)
            existed = key in model
            lru_before = model[0] if model else None
            size = cache.put(key, value)
            if existed:
                model.remove(key)
                assert size == size_before
            elif len(model) == capacity:
                evicted = model.pop(0)
                assert evicted == lru_before
                assert evicted not in cache
                del values[evicted]
            model.append(key)
            values[key] = value
            assert size == len(model)
        else:
            value, found = cache.get(key)
            if key in model:
                hits += 1
                assert found and value == values[key]
                model.remove(key)
                model.append(key)
            else:
                misses += 1
                assert not found and value is None
        assert len(cache) <= capacity
        assert cache.hits >= prev_hits and cache.misses >= prev_misses
        snap = list(cache.snapshot())
        assert [e.key for e in snap] == model
        if snap:
            assert snap[-1].key == key or key not in model
            assert [e.is_lru for e in snap].count(True) == 1
            assert [e.is_mru for e in snap].count(True) == 1
            assert snap[0].is_lru and snap[-1].is_mru
    assert (cache.hits, cache.misses) == (hits, misses)
