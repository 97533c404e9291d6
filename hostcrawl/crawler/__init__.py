"""hostcrawl.crawler: registry, frontier, worker pool and the default collaborators."""

from hostcrawl.crawler.crawler import AsyncCrawler
from hostcrawl.crawler.fetcher import Fetcher, HttpFetcher
from hostcrawl.crawler.frontier import Frontier, OutstandingCounter
from hostcrawl.crawler.link_extractor import HtmlLinkParser, Parser, extract_links
from hostcrawl.crawler.models import CrawlResult, CrawlState, CrawlStats
from hostcrawl.crawler.registry import UrlRegistry
from hostcrawl.crawler.stream import ResultCollector, ResultSink, ResultStream

__all__ = [
    "AsyncCrawler",
    "CrawlResult",
    "CrawlState",
    "CrawlStats",
    "Fetcher",
    "Frontier",
    "HtmlLinkParser",
    "HttpFetcher",
    "OutstandingCounter",
    "Parser",
    "ResultCollector",
    "ResultSink",
    "ResultStream",
    "UrlRegistry",
    "extract_links",
]
