"""Per-ticket storage for operations that are in flight."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from puke.ring.completion import Filler


@dataclass
class MsgHeader:
    """A message header pointing at a single buffer."""

    iov: Any = None
    iovlen: int = 0


class InFlight:
    """Keeps the buffers and fillers of each in-flight ticket alive."""

    def __init__(self, size: int) -> None:
        self._iovecs: list[Any] = [None] * size
        self._msghdrs = [MsgHeader() for _ in range(size)]
        self._fillers: list[Filler | None] = [None] * size

    def insert(
        self, ticket: int, iovec: Any, msghdr: bool, filler: Filler
    ) -> Any:
        """Store an operation's data under `ticket`.

        Returns what the submission should point at: the message header if
        `msghdr` is set, else the buffer, or None when there is no buffer.
        """
        if iovec is not None:
            self._iovecs[ticket] = iovec
            if msghdr:
                header = self._msghdrs[ticket]
                header.iov = iovec
                header.iovlen = 1
        self._fillers[ticket] = filler
        if iovec is None:
            return None
        return self._msghdrs[ticket] if msghdr else self._iovecs[ticket]

    def take_filler(self, ticket: int) -> Filler:
        """Remove and return the filler stored under `ticket`."""
        filler = self._fillers[ticket]
        if filler is None:
            raise LookupError(f"no filler in flight for ticket {ticket}")
        self._fillers[ticket] = None
        return filler

    def __repr__(self) -> str:
        return "InFlight { .. }"