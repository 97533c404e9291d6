from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.fetcher import Fetcher, HttpFetcher
from hostcrawl.crawler.frontier import Frontier, OutstandingCounter
from hostcrawl.crawler.link_extractor import HtmlLinkParser, Parser
from hostcrawl.crawler.models import CrawlResult, CrawlState, CrawlStats
from hostcrawl.crawler.registry import UrlRegistry
from hostcrawl.crawler.stream import ResultCollector, ResultSink, ResultStream
from hostcrawl.errors import FetchError, MalformedURLError, ParseError
from hostcrawl.logger import get_logger

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Concurrent single-host crawler.

    A fixed pool of worker tasks pulls canonical URLs from the frontier,
    claims them through the registry, fetches and parses them and pushes
    same-host children back. A detector task closes the frontier once the
    outstanding counter is zero and the queue is empty; workers then drain
    out and the result stream is closed for the sink.

    One instance runs one crawl.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        fetcher: Optional[Fetcher] = None,
        parser: Optional[Parser] = None,
        sink: Optional[ResultSink] = None,
    ) -> None:
        self.config = config
        self.logger = get_logger("crawler")
        self.registry = UrlRegistry(config.seed_url, shards=config.registry_shards)
        self.counter = OutstandingCounter()
        self.frontier = Frontier(self.counter)
        self.fetcher = fetcher
        self.parser: Parser = parser if parser is not None else HtmlLinkParser()
        self.sink: ResultSink = sink if sink is not None else ResultCollector()
        self.stats = CrawlStats()
        self.session: Optional[ClientSession] = None
        self._state = CrawlState.RUNNING
        self._cancelled = asyncio.Event()
        self._started = False

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.request_timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = HttpFetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def state(self) -> CrawlState:
        return self._state

    def cancel(self) -> None:
        """Ask every worker and the detector to stop; pending work is discarded."""
        self._cancelled.set()

    async def crawl(self) -> CrawlStats:
        if self._started:
            raise RuntimeError("crawl() can only run once per crawler")
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self._started = True

        seed = self.registry.seed_url
        self.logger.info("Crawl started: %s (%d workers)", seed, self.config.worker_count)
        self.stats = CrawlStats()
        stream = ResultStream()
        sink_task = asyncio.create_task(self.sink.consume(stream), name="hostcrawl-sink")

        # the seed is counted before the detector can observe an idle frontier
        await self.frontier.push(seed)
        self.stats.enqueued += 1

        tasks: List[asyncio.Task] = [
            asyncio.create_task(self._worker(stream), name=f"hostcrawl-worker-{i}")
            for i in range(self.config.worker_count)
        ]
        tasks.append(asyncio.create_task(self._detect_completion(), name="hostcrawl-detector"))
        try:
            await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            self.stats.cancelled = True
            await self._abort(tasks)
            raise
        except Exception:
            await self._abort(tasks)
            raise
        finally:
            self._state = CrawlState.CLOSED
            self.stats.finished_at = time.monotonic()
            stream.close()
            await sink_task
            self._finish()
        return self.stats

    async def _worker(self, stream: ResultStream) -> None:
        while True:
            url, ok = await self.frontier.pop()
            if not ok:
                return
            try:
                await self._process(url, stream)
            finally:
                self.counter.decrement()

    async def _process(self, url: str, stream: ResultStream) -> None:
        if not self.registry.try_claim(url):
            self.stats.duplicates += 1
            self.logger.debug("Already claimed: %s", url)
            return

        error: Optional[str] = None
        links: List[str] = []
        try:
            body = await self.fetcher.fetch(url)
            links = list(self.parser.parse(body))
        except (FetchError, ParseError) as exc:
            error = str(exc)
        except Exception as exc:
            error = f"{type(exc).__name__}: {exc}"
            self.logger.exception("Unexpected failure processing %s", url)

        if self._cancelled.is_set():
            self.logger.debug("Abandoned after cancellation: %s", url)
            return

        if error is not None:
            self.stats.failures += 1
            self.logger.warning("Failed %s: %s", url, error)
            stream.emit(CrawlResult(url, [], error=error))
            return

        for raw in links:
            try:
                child = self.registry.canonicalize(raw, base=url)
            except MalformedURLError as exc:
                self.stats.malformed += 1
                self.logger.debug("Skipping link on %s: %s", url, exc)
                continue
            if not self.registry.is_in_scope(child):
                self.stats.out_of_scope += 1
                continue
            if self.registry.is_claimed(child):
                self.stats.duplicates += 1
                continue
            if await self.frontier.push(child):
                self.stats.enqueued += 1

        self.stats.pages += 1
        stream.emit(CrawlResult(url, links))

    async def _detect_completion(self) -> None:
        while True:
            try:
                await asyncio.wait_for(self._cancelled.wait(), timeout=self.config.poll_interval)
            except asyncio.TimeoutError:
                pass
            else:
                self._state = CrawlState.DRAINING
                dropped = await self.frontier.close(discard=True)
                self.stats.cancelled = True
                self.logger.info("Crawl cancelled, %d queued URL(s) discarded", dropped)
                return
            if self.counter.value == 0 and self.frontier.empty():
                self._state = CrawlState.DRAINING
                await self.frontier.close()
                self.logger.debug("No outstanding work, frontier closed")
                return

    @staticmethod
    async def _abort(tasks: List[asyncio.Task]) -> None:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _finish(self) -> None:
        stats = self.stats
        self.logger.info(
            "Crawl finished: %d pages, %d failures in %.2f s (%.2f pages/s)",
            stats.pages,
            stats.failures,
            stats.elapsed,
            stats.pages_per_second,
        )

