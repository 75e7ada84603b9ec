#!/usr/bin/env python3
"""
UniqueMinHeap: binary min-heap holding at most one item per identity.

Items need an `id` attribute (hashable) and must support `<`.

- insert_or_replace(item): adds the item, or overwrites the item already stored
  under item.id and re-heapifies from its slot (decrease-key by replacement).
- lookup(id): the stored item for an identity in O(1), or None.
- extract_min(): removes and returns the smallest item, or None when empty.

Ties are resolved by array position, so a fixed sequence of operations always
produces the same extraction order.
"""

from typing import Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T")


class UniqueMinHeap(Generic[T]):

    def __init__(self) -> None:
        self._items: List[T] = []
        self._positions: Dict[Hashable, int] = {}   # id -> index in _items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, ident: Hashable) -> bool:
        return ident in self._positions

    # -------------------- API --------------------

    def peek_min(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def lookup(self, ident: Hashable) -> Optional[T]:
        pos = self._positions.get(ident)
        if pos is None:
            return None
        return self._items[pos]

    def extract_min(self) -> Optional[T]:
        if not self._items:
            return None

        last = self._items.pop()
        if not self._items:
            del self._positions[last.id]
            return last

        first = self._items[0]
        self._items[0] = last
        del self._positions[first.id]
        self._positions[last.id] = 0
        self._sift_down(0)
        return first

    def insert_or_replace(self, item: T) -> None:
        pos = self._positions.get(item.id)
        if pos is not None:
            self._items[pos] = item
        else:
            self._items.append(item)
            pos = len(self._items) - 1
            self._positions[item.id] = pos

        self._sift_up(pos)
        # a replacement can also need to move down
        if self._positions[item.id] == pos:
            self._sift_down(pos)

    # -------------------- heap maintenance --------------------

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        self._positions[items[i].id] = j
        self._positions[items[j].id] = i
        items[i], items[j] = items[j], items[i]

    def _sift_up(self, index: int) -> None:
        items = self._items
        while index > 0:
            parent = (index - 1) // 2
            if not items[index] < items[parent]:
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        items = self._items
        n = len(items)
        while True:
            left = 2 * index + 1
            if left >= n:
                return
            smaller = left
            right = left + 1
            if right < n and items[right] < items[left]:
                smaller = right
            if not items[smaller] < items[index]:
                return
            self._swap(index, smaller)
            index = smaller
