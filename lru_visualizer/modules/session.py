"""Application state for the visualizer: one cache, its operation log, input policy."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, NamedTuple, Optional

import logging

from lru_visualizer.modules.config import AppConfig
from lru_visualizer.modules.lru_cache import LRUCache
from lru_visualizer.modules.slots import slot_index_of


logger = logging.getLogger(__name__)

OPERATIONS = ("get", "put")


class InvalidInput(ValueError):
    """User input rejected before reaching the cache."""


class InvalidOperation(ValueError):
    """Operation name is neither get nor put."""


class LogEntry(NamedTuple):
    number: int
    message: str
    kind: str  # info | hit | miss


class OperationResult(NamedTuple):
    operation: str
    key: str
    value: Optional[str]
    found: Optional[bool]
    evicted: Optional[str]
    highlight: Optional[int]
    log_entry: LogEntry


def normalize_key(raw: Optional[str]) -> str:
    return (raw or "").strip().upper()


class CacheSession:
    """Owns a cache plus the rolling log shown next to it.

    Keys are trimmed and upper-cased here, capacities are clamped to the
    configured range, and empty input is rejected before the cache is touched.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self.config = config or AppConfig()
        self.cache = LRUCache(self.config.default_capacity)
        self._counter = 0
        self._log: Deque[LogEntry] = deque(maxlen=self.config.log_limit)
        self._add_log(f"Cache initialized with size {self.cache.capacity}")

    @property
    def log(self) -> List[LogEntry]:
        return list(self._log)

    def clamp_capacity(self, capacity: int) -> int:
        return self.config.clamp(capacity)

    def _add_log(self, message: str, kind: str = "info") -> LogEntry:
        self._counter += 1
        entry = LogEntry(self._counter, message, kind)
        # newest first; deque drops the oldest from the right
        self._log.appendleft(entry)
        return entry

    def execute(self, operation: str, key: Optional[str], value: Optional[str] = None) -> OperationResult:
        op = (operation or "").strip().lower()
        if op not in OPERATIONS:
            raise InvalidOperation(f"Unknown operation: {operation!r}")
        norm_key = normalize_key(key)
        if not norm_key:
            logger.warning("Rejected %s with empty key", op)
            raise InvalidInput("Please enter a key")
        if op == "put":
            norm_value = (value or "").strip()
            if not norm_value:
                logger.warning("Rejected put for %s without value", norm_key)
                raise InvalidInput("Please enter a value for put operation")
            return self._put(norm_key, norm_value)
        return self._get(norm_key)

    def _put(self, key: str, value: str) -> OperationResult:
        cache = self.cache
        evicted = None
        if key not in cache and len(cache) == cache.capacity:
            evicted = cache.lru_key()
        size = cache.put(key, value)
        message = f"PUT: Added {{{key}: {value}}} to cache"
        if evicted is not None:
            message += f' (LRU item "{evicted}" was evicted)'
        logger.info("%s", message)
        entry = self._add_log(message)
        return OperationResult("put", key, value, None, evicted, size - 1, entry)

    def _get(self, key: str) -> OperationResult:
        value, found = self.cache.get(key)
        if found:
            message = f'GET: Key "{key}" found in cache, value = {value}'
            kind = "hit"
            highlight = slot_index_of(self.cache.snapshot(), key)
        else:
            message = f'GET: Key "{key}" not found in cache'
            kind = "miss"
            highlight = None
        logger.info("%s", message)
        entry = self._add_log(message, kind)
        return OperationResult("get", key, value, found, None, highlight, entry)

    def reset(self, capacity: Optional[int] = None) -> int:
        new_capacity = self.cache.capacity if capacity is None else self.clamp_capacity(capacity)
        self.cache.reset(new_capacity)
        self._counter = 0
        self._log.clear()
        self._add_log(f"Cache reset with size {new_capacity}")
        logger.info("Cache reset with size %d", new_capacity)
        return new_capacity

    def state(self) -> Dict[str, Any]:
        stats = self.cache.stats()
        stats["snapshot"] = list(self.cache.snapshot())
        stats["log"] = self.log
        return stats


__all__ = [
    "OPERATIONS",
    "InvalidInput",
    "InvalidOperation",
    "LogEntry",
    "OperationResult",
    "normalize_key",
    "CacheSession",
]
