"""A one-shot result shared between a waiter and the thread that fills it."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Generic, TypeVar, Union

from puke.metrics import Measure, metrics
from puke.ring.kernel_types import CompletionEvent

C = TypeVar("C")

Result = Union[CompletionEvent, OSError]

_EMPTY = object()
_TAKEN = object()


def to_size(event: CompletionEvent) -> int:
    """Interpret a completion as a byte count; ValueError if it is negative."""
    if event.res < 0:
        raise ValueError(f"completion result {event.res} is not a size")
    return event.res


def to_none(event: CompletionEvent) -> None:
    """Interpret a completion as carrying no value."""
    return None


@dataclass
class _State:
    cond: threading.Condition = field(default_factory=threading.Condition)
    done: bool = False
    item: Any = _EMPTY
    waker: Callable[[], None] | None = None


def _resolve(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)


class Completion(Generic[C]):
    """A value that becomes available once its `Filler` is filled.

    Block on it with `wait()` or `await` it in a coroutine.
    """

    def __init__(
        self,
        state: _State,
        submit: Callable[[int], None] | None,
        convert: Callable[[CompletionEvent], C],
    ) -> None:
        self._state = state
        self._submit = submit
        self._convert = convert
        self.sqe_id = 0

    def _ensure_submitted(self) -> None:
        if self.sqe_id == 0:
            raise RuntimeError("sqe_id was never filled-in for this Completion")
        if self._submit is not None:
            self._submit(self.sqe_id)

    def _take(self) -> C:
        with self._state.cond:
            item = self._state.item
            if item is _TAKEN or item is _EMPTY:
                raise RuntimeError("completion result was already consumed")
            self._state.item = _TAKEN
        if isinstance(item, OSError):
            raise item
        return self._convert(item)

    def wait(self) -> C:
        """Block until the result arrives and return it, raising OSError on failure."""
        self._ensure_submitted()
        state = self._state
        with Measure(metrics().wait):
            with state.cond:
                state.cond.wait_for(lambda: state.done)
        return self._take()

    def __await__(self) -> Generator[Any, None, C]:
        self._ensure_submitted()
        loop = asyncio.get_running_loop()
        woken = loop.create_future()

        def wake() -> None:
            try:
                loop.call_soon_threadsafe(_resolve, woken)
            except RuntimeError:
                pass

        with self._state.cond:
            ready = self._state.done
            if not ready:
                self._state.waker = wake
        if not ready:
            yield from woken.__await__()
        return self._take()


class Filler:
    """The side that completes a `Completion`."""

    def __init__(self, state: _State) -> None:
        self._state = state

    def fill(self, result: Result) -> None:
        """Hand the result to the waiting side; a result may be given only once."""
        state = self._state
        with state.cond:
            if state.done:
                raise RuntimeError("completion was already filled")
            waker, state.waker = state.waker, None
            state.item = result
            state.done = True
            state.cond.notify_all()
        if waker is not None:
            waker()


def pair(
    submit: Callable[[int], None] | None = None,
    convert: Callable[[CompletionEvent], C] = to_none,  # type: ignore[assignment]
) -> tuple[Completion[C], Filler]:
    """Create a `Completion` and the `Filler` that completes it.

    `submit` is called with the completion's `sqe_id` before waiting, and
    `convert` turns a successful event into the value returned.
    """
    state = _State()
    return Completion(state, submit, convert), Filler(state)