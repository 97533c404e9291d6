# File: tests/conftest.py
import asyncio
import logging
from collections import Counter
from typing import Dict, Iterable

import pytest

from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.models import CrawlResult
from hostcrawl.errors import FetchError
from hostcrawl.logger import LOGGER_NAME

SEED = "https://x.com"

#: link graph used by the end-to-end scenario; unknown URLs serve an empty page
SITE: Dict[str, str] = {
    "https://x.com": """
        <html><body>
            <a href="about.html">About</a>
            <a href="blog.html">Blog</a>
            <a href="/products.html">Products</a>
        </body></html>""",
    "https://x.com/blog.html": """
        <html><body>
            <a href="post-1.html">Post 1</a>
            <a href="post-2.html">Post 2</a>
            <a href="2.html">Page 2</a>
        </body></html>""",
    "https://x.com/2.html": """
        <html><body>
            <a href="blog.html">Back to blog</a>
            <a href="/">Home</a>
        </body></html>""",
    "https://x.com/about.html": """
        <html><body>
            <a href="https://y.com/page">Elsewhere</a>
            <a href="#team">Team</a>
            <a href="mailto:hello@x.com">Mail</a>
        </body></html>""",
}

SITE_URLS = {
    "https://x.com",
    "https://x.com/about.html",
    "https://x.com/blog.html",
    "https://x.com/products.html",
    "https://x.com/post-1.html",
    "https://x.com/post-2.html",
    "https://x.com/2.html",
}


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class MockFetcher:
    """In-memory fetcher serving *pages*; records every requested URL."""

    def __init__(
        self,
        pages: Dict[str, str],
        *,
        fail: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.pages = pages
        self.fail = set(fail)
        self.delay = delay
        self.calls: Counter = Counter()

    async def fetch(self, url: str) -> bytes:
        self.calls[url] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        else:
            await asyncio.sleep(0)
        if url in self.fail:
            raise FetchError(url, f"HTTP 500 for {url}", status=500)
        return self.pages.get(url, "<html><body></body></html>").encode("utf-8")


def make_config(seed: str = SEED, **kwargs) -> CrawlerConfig:
    params = {"seed_url": seed, "worker_count": 4, "request_timeout": 2.0, "poll_interval": 0.01}
    params.update(kwargs)
    return CrawlerConfig(**params)


def urls_of(results: Iterable[CrawlResult]) -> Counter:
    return Counter(r.url for r in results)


@pytest.fixture()
def config() -> CrawlerConfig:
    return make_config()


@pytest.fixture()
def site_fetcher() -> MockFetcher:
    return MockFetcher(SITE)


@pytest.fixture()
def mock_result() -> CrawlResult:
    return CrawlResult(url="https://x.com", links=["about.html", "/products.html"])


@pytest.fixture()
def failed_result() -> CrawlResult:
    return CrawlResult(url="https://x.com/broken", error="HTTP 500 for https://x.com/broken")


@pytest.fixture(autouse=True)
def reset_project_logger():
    """The CLI rebinds handlers to CliRunner's streams; undo that after each test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
