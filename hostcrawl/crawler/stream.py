"""
Result stream between the worker pool and the result sink.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, List, Protocol, Union

from hostcrawl.crawler.models import CrawlResult

__all__ = ("ResultStream", "ResultSink", "ResultCollector")


class ResultSink(Protocol):
    """Consumes results until the stream is closed."""

    async def consume(self, results: AsyncIterator[CrawlResult]) -> None:
        ...


class _EndOfStream:
    __slots__ = ()


_END = _EndOfStream()


class ResultStream:
    """Unbounded queue of results; ``emit`` never blocks a worker."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Union[CrawlResult, _EndOfStream]] = asyncio.Queue()
        self._closed = False
        self.emitted = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, result: CrawlResult) -> None:
        if self._closed:
            raise RuntimeError("result stream is closed")
        self._queue.put_nowait(result)
        self.emitted += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_END)

    def __aiter__(self) -> AsyncIterator[CrawlResult]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[CrawlResult]:
        while True:
            item = await self._queue.get()
            if isinstance(item, _EndOfStream):
                return
            yield item


class ResultCollector:
    """Sink that keeps every result in arrival order."""

    def __init__(self) -> None:
        self.results: List[CrawlResult] = []

    def handle(self, result: CrawlResult) -> None:
        self.results.append(result)

    async def consume(self, results: AsyncIterator[CrawlResult]) -> None:
        async for result in results:
            self.handle(result)
