"""A thread-safe stack that can push, pop, or take all of its entries at once."""

from __future__ import annotations

import threading
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class Stack(Generic[T]):
    """A last-in, first-out stack safe to share between threads.

    Iteration yields items from the most recently pushed to the oldest.
    """

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def push(self, item: T) -> None:
        """Add an item to the top of the stack."""
        with self._lock:
            self._items.append(item)

    def pop(self) -> T | None:
        """Remove and return the top item, or None if the stack is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.pop()

    def take_iter(self) -> Iterator[T]:
        """Clear the stack and return an iterator over everything it held."""
        with self._lock:
            taken, self._items = self._items, []
        return reversed(taken)

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = list(self._items)
        return reversed(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"({item!r}) {item!r}" for item in self)
        return f"Stack [{inner}]"