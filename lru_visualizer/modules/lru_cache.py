"""Fixed-capacity LRU cache with hit/miss accounting.

Recency is tracked with a dict of key -> node plus a doubly linked list
between two sentinels: head side is least recently used, tail side is most
recently used.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator, NamedTuple, Optional

import logging

logger = logging.getLogger(__name__)


class InvalidCapacity(ValueError):
    """Raised when a cache is built or reset with a non-positive capacity."""


class Lookup(NamedTuple):
    value: Any
    found: bool


class SnapshotEntry(NamedTuple):
    key: Hashable
    value: Any
    is_lru: bool
    is_mru: bool


class _Node:
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key: Hashable = None, value: Any = None) -> None:
        self.key = key
        self.value = value
        self.prev: Optional["_Node"] = None
        self.next: Optional["_Node"] = None


def _check_capacity(capacity: Any) -> int:
    # bool is an int subclass; True would silently mean capacity 1
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidCapacity(f"capacity must be a positive integer, got {capacity!r}")
    if capacity <= 0:
        raise InvalidCapacity(f"capacity must be > 0, got {capacity}")
    return capacity


class CacheSnapshot:
    """Read-only view of a cache in ascending recency order (LRU first).

    The view is lazy and can be iterated any number of times. Once the cache
    is mutated the view is stale and iterating it raises RuntimeError.
    """

    def __init__(self, cache: "LRUCache") -> None:
        self._cache = cache
        self._version = cache._version
        self._size = len(cache)

    def _check_fresh(self) -> None:
        if self._cache._version != self._version:
            raise RuntimeError("cache changed after snapshot was taken")

    def __iter__(self) -> Iterator[SnapshotEntry]:
        self._check_fresh()
        cache = self._cache
        node = cache._head.next
        index = 0
        last = self._size - 1
        while node is not cache._tail:
            self._check_fresh()
            yield SnapshotEntry(node.key, node.value, index == 0, index == last)
            node = node.next
            index += 1

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"CacheSnapshot({list(self)!r})"


class LRUCache:
    def __init__(self, capacity: int) -> None:
        self._capacity = _check_capacity(capacity)
        self._map: Dict[Hashable, _Node] = {}
        self._head = _Node()
        self._tail = _Node()
        self._head.next = self._tail
        self._tail.prev = self._head
        self._hits = 0
        self._misses = 0
        # bumped on every change to entries or order; invalidates snapshots
        self._version = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def size(self) -> int:
        return len(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._map

    def _unlink(self, node: _Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None

    def _append(self, node: _Node) -> None:
        last = self._tail.prev
        node.prev = last
        node.next = self._tail
        last.next = node
        self._tail.prev = node

    def _touch(self, node: _Node) -> None:
        if node.next is self._tail:
            return
        self._unlink(node)
        self._append(node)
        self._version += 1

    def _evict_lru(self) -> Hashable:
        lru = self._head.next
        self._unlink(lru)
        del self._map[lru.key]
        logger.debug("Evicted LRU key %r", lru.key)
        return lru.key

    def get(self, key: Hashable) -> Lookup:
        node = self._map.get(key)
        if node is None:
            self._misses += 1
            return Lookup(None, False)
        self._touch(node)
        self._hits += 1
        return Lookup(node.value, True)

    def put(self, key: Hashable, value: Any) -> int:
        node = self._map.get(key)
        if node is not None:
            node.value = value
            self._touch(node)
            self._version += 1
            return len(self._map)
        if len(self._map) >= self._capacity:
            self._evict_lru()
        node = _Node(key, value)
        self._map[key] = node
        self._append(node)
        self._version += 1
        return len(self._map)

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(self)

    def lru_key(self) -> Optional[Hashable]:
        node = self._head.next
        return None if node is self._tail else node.key

    def mru_key(self) -> Optional[Hashable]:
        node = self._tail.prev
        return None if node is self._head else node.key

    def reset(self, new_capacity: Optional[int] = None) -> None:
        if new_capacity is not None:
            # validate before discarding anything
            self._capacity = _check_capacity(new_capacity)
        self._map.clear()
        self._head.next = self._tail
        self._tail.prev = self._head
        self._hits = 0
        self._misses = 0
        self._version += 1
        logger.debug("Cache reset with capacity %d", self._capacity)

    def stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        return {
            "capacity": self._capacity,
            "size": len(self._map),
            "hits": self._hits,
            "misses": self._misses,
            "hit_ratio": (self._hits / total) if total else 0.0,
        }

    def __repr__(self) -> str:
        return f"LRUCache(capacity={self._capacity}, size={len(self._map)})"


__all__ = ["InvalidCapacity", "Lookup", "SnapshotEntry", "CacheSnapshot", "LRUCache"]
