"""A grow-only two-level table of machines keyed by a dense id space."""

from __future__ import annotations

import itertools
import threading
from typing import Any

from puke.stack import Stack

MAX_MID_BITS = 37
MAX_MID = 1 << MAX_MID_BITS
NODE2_FAN_FACTOR = 18
NODE1_FAN_OUT = 1 << (MAX_MID_BITS - NODE2_FAN_FACTOR)
NODE2_FAN_OUT = 1 << NODE2_FAN_FACTOR
FAN_MASK = NODE2_FAN_OUT - 1


def split_fanout(mid: int) -> tuple[int, int]:
    """Split a machine id into its first- and second-level indices."""
    if mid > MAX_MID:
        raise ValueError(
            f"trying to access key of {mid}, which is higher than 2 ^ {MAX_MID_BITS}"
        )
    return mid >> NODE2_FAN_FACTOR, mid & FAN_MASK


class MachineTable:
    """Maps machine ids to machines, handing out ids densely from zero."""

    def __init__(self, max_mid: int = MAX_MID) -> None:
        self._nodes: dict[int, dict[int, Any]] = {}
        self._free: Stack[int] = Stack()
        self._next_mid = itertools.count()
        self._max_mid = max_mid
        self._lock = threading.Lock()

    def _node(self, mid: int) -> tuple[dict[int, Any], int]:
        l1k, l2k = split_fanout(mid)
        if l1k >= NODE1_FAN_OUT:
            raise IndexError(f"machine id {mid} is outside the table")
        return self._nodes.setdefault(l1k, {}), l2k

    def insert(self, item: Any) -> int | None:
        """Store `item` and return its new id, or None when ids are exhausted.

        Raises RuntimeError if the chosen slot is already occupied.
        """
        with self._lock:
            mid = self._free.pop()
            if mid is None:
                mid = next(self._next_mid)
                if mid > self._max_mid:
                    return None
            node, slot = self._node(mid)
            if slot in node:
                raise RuntimeError(f"slot for machine id {mid} is already occupied")
            node[slot] = item
            return mid

    def get(self, mid: int) -> Any:
        """Return the machine stored under `mid`; raise KeyError if absent."""
        with self._lock:
            node, slot = self._node(mid)
            try:
                return node[slot]
            except KeyError:
                raise KeyError(f"tried to get pid {mid}") from None

    def contains_pid(self, mid: int) -> bool:
        """Return whether a machine is stored under `mid`."""
        with self._lock:
            node, slot = self._node(mid)
            return slot in node