"""A binary-heap priority queue ordered by a caller-supplied less function."""

from __future__ import annotations

from typing import Any, Callable, Optional

LessFn = Callable[[Any, Any], bool]


class PriorityQueue:
    """Heap whose top is the item for which ``less_fn`` holds against all others.

    Without a ``less_fn`` items are ordered by their position in the heap.
    """

    def __init__(self, less_fn: Optional[LessFn] = None) -> None:
        self._items: list[Any] = []
        self._less_fn = less_fn

    def _less(self, i: int, j: int) -> bool:
        if self._less_fn is None:
            return i < j
        return self._less_fn(self._items[i], self._items[j])

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, i: int, n: int) -> None:
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and self._less(right, left):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child

    def push(self, item: Any) -> None:
        """Add an item to the queue."""
        self._items.append(item)
        self._up(len(self._items) - 1)

    def pop(self) -> Any:
        """Remove and return the top item, or ``None`` if the queue is empty."""
        if not self._items:
            return None
        last = len(self._items) - 1
        self._swap(0, last)
        self._down(0, last)
        return self._items.pop()

    def empty(self) -> bool:
        """Return True if the queue holds no items."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)