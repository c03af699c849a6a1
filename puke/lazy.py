"""A lazily initialised, thread-safe value."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """Computes its value with `init` on first access, exactly once."""

    def __init__(self, init: Callable[[], T]) -> None:
        self._init = init
        self._value: object = _UNSET
        self._lock = threading.Lock()

    def get(self) -> T:
        """Return the value, initialising it first if needed."""
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = self._init()
            return self._value  # type: ignore[return-value]