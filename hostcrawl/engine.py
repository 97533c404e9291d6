"""hostcrawl.engine: orchestration layer that runs a crawl and collects its results."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.crawler import AsyncCrawler
from hostcrawl.crawler.models import CrawlResult, CrawlStats
from hostcrawl.crawler.stream import ResultCollector
from hostcrawl.logger import logger

__all__ = ["Engine", "run_crawl"]


async def run_crawl(
    cfg: CrawlerConfig, sink: Optional[ResultCollector] = None
) -> Tuple[CrawlStats, List[CrawlResult]]:
    """
    Run the crawler inside its context and return the counters and results.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.
    sink : ResultCollector, optional
        Sink receiving results as they are produced; a silent collector is
        used when omitted.

    Returns
    -------
    tuple
        ``(CrawlStats, list of CrawlResult)``.
    """
    collector = sink if sink is not None else ResultCollector()
    async with AsyncCrawler(cfg, sink=collector) as crawler:
        stats = await crawler.crawl()
    return stats, collector.results


class Engine:
    """Synchronous facade for scripts and tests: run the crawl, return results."""

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config

    def start_crawl(
        self, timeout: Optional[float] = None, sink: Optional[ResultCollector] = None
    ) -> Tuple[CrawlStats, List[CrawlResult]]:
        """Run the crawl synchronously, bounded by *timeout* seconds if given."""
        logger.info("Starting crawl of %s", self.config.seed_url)
        coro = run_crawl(self.config, sink)
        try:
            if timeout is not None:
                return asyncio.run(asyncio.wait_for(coro, timeout=timeout))
            return asyncio.run(coro)
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds", timeout)
            raise
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
