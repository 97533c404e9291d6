"""
Fetcher module: downloads raw page bodies over HTTP.

Retries and rate limiting are deliberately absent; a failure is reported
once and the crawl moves on.
"""
from __future__ import annotations

import asyncio
from typing import Protocol

from aiohttp import ClientError, ClientSession

from hostcrawl.errors import FetchError

__all__ = ("Fetcher", "HttpFetcher")


class Fetcher(Protocol):
    """Protocol for URL fetchers."""

    async def fetch(self, url: str) -> bytes:
        """Return the raw body of *url* or raise FetchError."""
        ...


class HttpFetcher:
    """Fetches pages with a shared aiohttp session.

    The request timeout is the session's ``ClientTimeout``.
    """

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> bytes:
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status >= 400:
                    raise FetchError(url, f"HTTP {resp.status} for {url}", status=resp.status)
                return await resp.read()
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timeout fetching {url}") from exc
        except ClientError as exc:
            raise FetchError(url, f"{type(exc).__name__} fetching {url}: {exc}") from exc
