"""Backpressure for submitters: never more operations in flight than slots."""

from __future__ import annotations

import threading
from typing import Iterable

from puke.metrics import Measure, metrics


class TicketQueue:
    """Hands out slot tickets, blocking when none are free."""

    def __init__(self, size: int) -> None:
        self._tickets = list(range(size))
        self._cond = threading.Condition()

    def push_multi(self, tickets: Iterable[int]) -> None:
        """Return tickets to the queue."""
        with Measure(metrics().ticket_queue_push):
            with self._cond:
                self._tickets.extend(tickets)
                self._cond.notify()

    def pop(self) -> int:
        """Take a ticket, blocking until one is available."""
        with Measure(metrics().ticket_queue_pop):
            with self._cond:
                self._cond.wait_for(lambda: bool(self._tickets))
                return self._tickets.pop()

    def __repr__(self) -> str:
        with self._cond:
            return f"TicketQueue {{ tickets: {self._tickets!r} }}"