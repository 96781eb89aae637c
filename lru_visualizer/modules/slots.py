"""Slot layout for rendering a cache snapshot."""

from __future__ import annotations

from typing import Any, Hashable, Iterable, List, NamedTuple, Optional

from lru_visualizer.modules.lru_cache import SnapshotEntry


class Slot(NamedTuple):
    index: int
    key: Optional[Hashable]
    value: Any
    occupied: bool
    is_lru: bool
    is_mru: bool


def build_slots(snapshot: Iterable[SnapshotEntry], capacity: int) -> List[Slot]:
    """Lay out exactly ``capacity`` slots, occupied ones first in LRU to MRU order.

    Indexes are 1-based for display.
    """
    slots: List[Slot] = [
        Slot(i, entry.key, entry.value, True, entry.is_lru, entry.is_mru)
        for i, entry in enumerate(snapshot, 1)
    ]
    for i in range(len(slots) + 1, capacity + 1):
        slots.append(Slot(i, None, None, False, False, False))
    return slots


def usage_label(size: int, capacity: int) -> str:
    return f"{size}/{capacity}"


def slot_index_of(snapshot: Iterable[SnapshotEntry], key: Hashable) -> Optional[int]:
    for i, entry in enumerate(snapshot):
        if entry.key == key:
            return i
    return None


__all__ = ["Slot", "build_slots", "usage_label", "slot_index_of"]
