"""
Frontier: the unbounded work queue shared by all workers, and the
outstanding-work counter used to detect global completion.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Optional, Tuple

__all__ = ("OutstandingCounter", "Frontier")


class OutstandingCounter:
    """Work items enqueued but not yet fully processed.

    All access happens on the event loop thread, so plain integer updates
    are atomic with respect to the workers.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value

    def decrement(self) -> int:
        if self._value <= 0:
            raise RuntimeError("outstanding counter would drop below zero")
        self._value -= 1
        return self._value

    def __repr__(self) -> str:
        return f"<OutstandingCounter value={self._value}>"


class Frontier:
    """Unbounded FIFO of canonical URLs.

    Producers and consumers are the same worker tasks, so the queue never
    applies back-pressure: ``push`` cannot block and the pool cannot
    deadlock on a full queue.
    """

    def __init__(self, counter: Optional[OutstandingCounter] = None) -> None:
        self.counter = counter if counter is not None else OutstandingCounter()
        self._items: Deque[str] = deque()
        self._cond = asyncio.Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._items)

    def empty(self) -> bool:
        return not self._items

    async def push(self, url: str) -> bool:
        """Enqueue *url*. Returns False, without counting it, once closed."""
        async with self._cond:
            if self._closed:
                return False
            # count first: the item must never be visible while uncounted
            self.counter.increment()
            self._items.append(url)
            self._cond.notify(1)
        return True

    async def pop(self) -> Tuple[Optional[str], bool]:
        """Wait for an item; ``(None, False)`` once closed and drained."""
        async with self._cond:
            await self._cond.wait_for(lambda: bool(self._items) or self._closed)
            if self._items:
                return self._items.popleft(), True
            return None, False

    async def close(self, *, discard: bool = False) -> int:
        """
        Stop accepting work and wake every waiting consumer.

        With *discard* the pending items are dropped and their count is
        returned. Closing twice is a programming error.
        """
        async with self._cond:
            if self._closed:
                raise RuntimeError("frontier already closed")
            self._closed = True
            dropped = 0
            if discard:
                dropped = len(self._items)
                self._items.clear()
            self._cond.notify_all()
        return dropped
